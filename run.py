#!/usr/bin/env python3
"""Run script for the user directory API."""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "userdirectory.api.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True
    )
