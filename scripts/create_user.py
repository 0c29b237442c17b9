"""Create a user from the command line.

The user endpoints require a bearer token, so the first account has to be
created directly against the database.
"""

import argparse
import getpass
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userdirectory.auth.passwords import CredentialHasher
from userdirectory.config import get_bcrypt_rounds
from userdirectory.database.database import SessionLocal, init_db
from userdirectory.database.user_repository import UserRepository
from userdirectory.services.users_service import UsersService


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a user directory account")
    parser.add_argument("name", help="Display name for the user")
    parser.add_argument("email", help="Unique email address for login")
    parser.add_argument("age", type=int, help="Age of the user")
    return parser.parse_args(argv)


def prompt_for_password() -> str:
    for _ in range(3):
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match. Try again.", file=sys.stderr)
            continue
        if not password:
            print("Password must not be empty.", file=sys.stderr)
            continue
        return password
    raise SystemExit("Failed to set password after three attempts.")


def main(argv=None) -> int:
    args = parse_args(argv)
    password = prompt_for_password()

    init_db()
    db = SessionLocal()
    try:
        service = UsersService(UserRepository(db), CredentialHasher(rounds=get_bcrypt_rounds()))
        outcome = service.create(args.name.strip(), args.email.strip(), args.age, password)
    finally:
        db.close()

    if not outcome.ok:
        print(f"Error: {outcome.error.detail}", file=sys.stderr)
        return 1

    user = outcome.value
    print(f"Created user {user.id}: {user.name} <{user.email}>")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
