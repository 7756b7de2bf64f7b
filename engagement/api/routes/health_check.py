from fastapi import APIRouter, Depends, status
from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.depends import get_session

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(session: AsyncSession = Depends(get_session)):
    """Liveness plus a trivial store round-trip"""
    await session.execute(text("SELECT 1"))
    return {"status": "ok"}
