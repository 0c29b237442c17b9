"""SQLAlchemy database models for the user directory."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Integer, DateTime, UniqueConstraint

from userdirectory.database.database import Base


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"
    __table_args__ = (
        # Enforces one user per email even when two writes race past the service check.
        UniqueConstraint("email", name="uq_users_email"),
    )

    # Primary key (UUID v4 string)
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Profile
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    age = Column(Integer, nullable=False)

    # Credentials
    password_hash = Column(String, nullable=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from userdirectory.models.user import User
        return User(
            id=self.id,
            name=self.name,
            email=self.email,
            age=self.age,
            password_hash=self.password_hash,
        )

    @classmethod
    def from_pydantic(cls, user):
        """Create database model from Pydantic model."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            age=user.age,
            password_hash=user.password_hash,
        )
