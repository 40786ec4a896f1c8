from datetime import datetime
from typing import Optional

from sqlalchemy import func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.base import utcnow
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by exact email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_reset_token(self, token_hash: str) -> Optional[User]:
        """Get user holding the given reset token digest"""
        stmt = select(User).where(User.reset_token == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        user.updated_at = utcnow()
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update_reset_token(
        self, email: str, token_hash: Optional[str], expires_at: Optional[datetime]
    ) -> None:
        """Write both reset token fields in a single UPDATE so they never diverge"""
        stmt = (
            update(User)
            .where(User.email == email)
            .values(reset_token=token_hash, reset_token_expiry=expires_at, updated_at=utcnow())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def count(self) -> int:
        """Count all users"""
        stmt = select(func.count()).select_from(User)
        result = await self.session.exec(stmt)
        return result.one()
