from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from engagement.adapter.services.reward_provider import HttpRewardProvider
from engagement.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from engagement.api.error import raise_for_error
from engagement.api.utils.jwt import verify_jwt
from engagement.app.services.reward_provider import RewardProvider
from engagement.app.use_cases.users import CurrentUser, ResolveUserUseCase

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
) -> CurrentUser:
    """
    Dependency resolving the Bearer token to a local User row.

    The token is verified here; the person behind it is created on first
    sight.

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    payload = verify_jwt(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    result = await ResolveUserUseCase(uow).execute(payload["sub"], payload["email"])
    raise_for_error(result)
    return result.value


def get_reward_provider() -> Optional[RewardProvider]:
    """The configured reward provider, or None when none is configured"""
    if not ApplicationConfig.REWARD_PROVIDER_BASE_URL:
        return None
    return HttpRewardProvider(
        base_url=ApplicationConfig.REWARD_PROVIDER_BASE_URL,
        api_key=ApplicationConfig.REWARD_PROVIDER_API_KEY,
        program_id=ApplicationConfig.REWARD_PROVIDER_PROGRAM_ID,
        timeout_seconds=ApplicationConfig.REWARD_PROVIDER_TIMEOUT_SECONDS,
    )
