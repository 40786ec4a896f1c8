from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.domain.entities import User


class IUserRepository(ABC):
    """User (account store) repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by exact email address"""
        pass

    @abstractmethod
    async def get_by_reset_token(self, token_hash: str) -> Optional[User]:
        """Get user holding the given reset token digest"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def update_reset_token(
        self, email: str, token_hash: Optional[str], expires_at: Optional[datetime]
    ) -> None:
        """Set (or clear, with None) both reset token fields of the user with this email"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all users"""
        pass
