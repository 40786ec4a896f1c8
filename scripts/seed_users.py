"""
Seed the database with sample accounts for local development.

Usage:
    python -m scripts.seed_users
"""
import asyncio
import logging

import bcrypt
from sqlmodel import SQLModel

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import create_engine, create_session_factory
from src.domain.entities import User
from src.logging_config import setup_logging

logger = logging.getLogger("scripts.seed_users")

SEED_PASSWORD = "SwingDecoder123!"

SAMPLE_USERS = [
    {"email": "john.doe@example.com", "name": "John Doe", "with_password": True},
    {"email": "jane.smith@example.com", "name": "Jane Smith", "with_password": True},
    # Social-login-only account, not eligible for password reset
    {"email": "bob.johnson@example.com", "name": "Bob Johnson", "with_password": False},
]


async def seed(db_uri: str) -> int:
    """Create any missing sample accounts and return how many were added"""
    engine = create_engine(db_uri)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    password_hash = bcrypt.hashpw(SEED_PASSWORD.encode(), bcrypt.gensalt(12)).decode()
    created = 0
    try:
        async with create_session_factory(engine)() as session:
            async with SqlAlchemyUnitOfWork(session) as uow:
                for sample in SAMPLE_USERS:
                    if await uow.users.get_by_email(sample["email"]) is not None:
                        logger.info(f"User already exists: {sample['email']}")
                        continue
                    await uow.users.create(
                        User(
                            email=sample["email"],
                            name=sample["name"],
                            password_hash=password_hash if sample["with_password"] else None,
                        )
                    )
                    created += 1
                    logger.info(f"Created user: {sample['email']}")
                await uow.commit()
    finally:
        await engine.dispose()
    return created


def main():
    setup_logging(
        log_level=ApplicationConfig.LOG_LEVEL,
        enable_json=False,
        service=ApplicationConfig.SERVICE_NAME,
        environment=ApplicationConfig.ENVIRONMENT,
    )
    logger.info("Starting database seed...")
    created = asyncio.run(seed(ApplicationConfig.DB_URI))
    logger.info(f"Database seeded successfully! ({created} users created)")


if __name__ == "__main__":
    main()
