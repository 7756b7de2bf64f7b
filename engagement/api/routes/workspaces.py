from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from engagement.api.error import envelope
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.app.use_cases.memberships import (
    ChangeRoleUseCase,
    CreateMembershipCommand,
    CreateMembershipUseCase,
    GetMembershipUseCase,
    ListWorkspaceMembershipsUseCase,
    RemoveMembershipUseCase,
    SetPrimaryMembershipUseCase,
    TransferOwnershipUseCase,
)
from engagement.app.use_cases.workspaces import GetWorkspaceUseCase
from engagement.app.use_cases.users import CurrentUser
from engagement.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/workspaces", tags=["Workspace"])


class ChangeRoleRequest(BaseModel):
    role: str = Field(..., description="New role (ADMIN/MANAGER/PARTICIPANT)")


class TransferOwnershipRequest(BaseModel):
    new_owner_user_id: UUID


@router.get("/{slug}", status_code=status.HTTP_200_OK)
async def get_workspace(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Get an active workspace by slug"""
    result = await GetWorkspaceUseCase(uow).execute(slug)
    return envelope(result)


@router.get("/{slug}/membership", status_code=status.HTTP_200_OK)
async def get_my_membership(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """The caller's membership in this workspace"""
    result = await GetMembershipUseCase(uow).execute(current_user.id, slug)
    return envelope(result)


@router.post("/{slug}/membership/primary", status_code=status.HTTP_200_OK)
async def set_primary_membership(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Make this workspace the caller's primary workspace"""
    result = await SetPrimaryMembershipUseCase(uow).execute(current_user.id, slug)
    return envelope(result)


@router.get("/{slug}/members", status_code=status.HTTP_200_OK)
async def list_members(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List workspace members. ADMIN/MANAGER only."""
    result = await ListWorkspaceMembershipsUseCase(uow).execute(current_user.id, slug)
    return envelope(result)


@router.put("/{slug}/members/{user_id}", status_code=status.HTTP_201_CREATED)
async def add_member(
    slug: str,
    user_id: UUID,
    request: CreateMembershipCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Add an existing user to the workspace. ADMIN only.

    Raises:
        - 403 Forbidden: caller is not an ADMIN
        - 404 Not Found: workspace or user not found
        - 409 Conflict: user is already a member
    """
    result = await CreateMembershipUseCase(uow).execute(current_user.id, slug, user_id, request)
    return envelope(result)


@router.patch("/{slug}/members/{user_id}/role", status_code=status.HTTP_200_OK)
async def change_member_role(
    slug: str,
    user_id: UUID,
    request: ChangeRoleRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change a member's role. ADMIN only; the owner always stays ADMIN.

    Raises:
        - 403 Forbidden: caller is not an ADMIN
        - 404 Not Found: target is not a member
        - 409 Conflict: target is the owner
        - 422 Unprocessable Entity: unknown role
    """
    result = await ChangeRoleUseCase(uow).execute(current_user.id, slug, user_id, request.role)
    return envelope(result)


@router.delete("/{slug}/members/{user_id}", status_code=status.HTTP_200_OK)
async def remove_member(
    slug: str,
    user_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove a member, or leave the workspace when user_id is the caller.

    Raises:
        - 403 Forbidden: caller may not remove others
        - 409 Conflict: target is the owner (transfer ownership first)
    """
    result = await RemoveMembershipUseCase(uow).execute(current_user.id, slug, user_id)
    return envelope(result)


@router.post("/{slug}/ownership", status_code=status.HTTP_200_OK)
async def transfer_ownership(
    slug: str,
    request: TransferOwnershipRequest,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Transfer workspace ownership to another ADMIN.

    Raises:
        - 403 Forbidden: caller is not the owner
        - 404 Not Found: either membership missing
        - 409 Conflict: ownership changed concurrently
        - 422 Unprocessable Entity: target is not an ADMIN
    """
    result = await TransferOwnershipUseCase(uow).execute(
        current_user.id, slug, request.new_owner_user_id
    )
    return envelope(result)
