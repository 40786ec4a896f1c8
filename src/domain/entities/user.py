"""
User Entity

Represents an account that can sign in and request a password reset.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - an account holder of the handicap tracker.

    Business Rules:
    - Email must be unique across all users (exact, case-sensitive match)
    - Password stored as bcrypt hash (cost factor 12); social-login-only
      accounts have no password hash and cannot reset a password
    - reset_token holds the SHA-256 digest of the issued token, never the token
    - reset_token and reset_token_expiry are set together and cleared together
    - A new reset request overwrites any outstanding token
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)  # Bcrypt output is 60 chars

    # Password reset (single outstanding token per account)
    reset_token: Optional[str] = Field(default=None, unique=True, max_length=64)  # SHA-256 output
    reset_token_expiry: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_reset_token_expiry", "reset_token_expiry"),)

    def has_password(self) -> bool:
        return bool(self.password_hash)

    def is_reset_token_expired(self, now: Optional[datetime] = None) -> bool:
        if self.reset_token_expiry is None:
            return True
        return (now or utcnow()) > self.reset_token_expiry
