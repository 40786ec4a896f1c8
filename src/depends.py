from typing import Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.golf_course_client import IGolfCourseClient
from src.app.services.notifier import IPasswordResetNotifier
from src.app.use_cases.auth import PasswordResetSettings


def create_engine(db_uri: str) -> AsyncEngine:
    return create_async_engine(db_uri, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_reset_settings(request: Request) -> PasswordResetSettings:
    return request.app.state.password_reset_settings


def get_password_reset_notifier(request: Request) -> IPasswordResetNotifier:
    return request.app.state.password_reset_notifier


def get_golf_course_client(request: Request) -> Optional[IGolfCourseClient]:
    """None when no directory API key is configured"""
    return request.app.state.golf_course_client
