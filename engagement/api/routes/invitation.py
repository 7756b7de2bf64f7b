"""
Invite API Routes

Invite codes are created and managed per workspace; redemption and the
public preview are addressed by code.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from config import ApplicationConfig
from engagement.api.error import envelope
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.app.use_cases.invites import (
    CreateInviteCommand,
    CreateInviteUseCase,
    DeleteInviteUseCase,
    GetInviteUseCase,
    ListInvitesUseCase,
    RedeemInviteUseCase,
)
from engagement.app.use_cases.users import CurrentUser
from engagement.depends import get_current_user, get_unit_of_work

router = APIRouter(tags=["Invitations"])


@router.post("/workspaces/{slug}/invites", status_code=status.HTTP_201_CREATED)
async def create_invite(
    slug: str,
    request: CreateInviteCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Invite Code. ADMIN only.

    Raises:
        - 403 Forbidden: caller is not an ADMIN
        - 404 Not Found: workspace or referenced challenge not found
    """
    use_case = CreateInviteUseCase(
        uow,
        default_expiry_hours=ApplicationConfig.INVITE_DEFAULT_EXPIRY_HOURS,
        code_length=ApplicationConfig.INVITE_CODE_LENGTH,
    )
    result = await use_case.execute(current_user.id, slug, request)
    return envelope(result)


@router.get("/workspaces/{slug}/invites", status_code=status.HTTP_200_OK)
async def list_invites(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List the workspace's invite codes. ADMIN only."""
    result = await ListInvitesUseCase(uow).execute(current_user.id, slug)
    return envelope(result)


@router.delete("/workspaces/{slug}/invites/{invite_id}", status_code=status.HTTP_200_OK)
async def delete_invite(
    slug: str,
    invite_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete an invite code. ADMIN only."""
    result = await DeleteInviteUseCase(uow).execute(current_user.id, slug, invite_id)
    return envelope(result)


@router.get("/invites/{code}", status_code=status.HTTP_200_OK)
async def get_invite(
    code: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Public invite preview, shown before sign-in"""
    result = await GetInviteUseCase(uow).execute(code)
    return envelope(result)


@router.post("/invites/{code}/redeem", status_code=status.HTTP_200_OK)
async def redeem_invite(
    code: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Redeem Invite Code

    Joins the caller to the workspace (and challenge) the code points at.

    Raises:
        - 403 Forbidden: invite issued for a different email
        - 404 Not Found: unknown code
        - 410 Gone: INVITE_EXPIRED or INVITE_EXHAUSTED
    """
    result = await RedeemInviteUseCase(uow).execute(code, current_user.id)
    return envelope(result)
