"""User module dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.infrastructure.database.session import get_db_session
from src.modules.users.infrastructure.mappers import UserMapper
from src.modules.users.infrastructure.repositories import PostgreSQLUserRepository


def get_user_mapper() -> UserMapper:
    return UserMapper()


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
    mapper: UserMapper = Depends(get_user_mapper),
) -> PostgreSQLUserRepository:
    return PostgreSQLUserRepository(session, mapper)
