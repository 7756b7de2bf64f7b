"""
Admin API Routes - Platform Administration Endpoints

Workspace provisioning for platform operators. Authentication is via the
Admin API Key, not user JWTs.
"""

from fastapi import APIRouter, Depends, status

from engagement.api.error import envelope
from engagement.api.utils.admin_auth import verify_admin_api_key
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.app.use_cases.workspaces import (
    CreateWorkspaceCommand,
    CreateWorkspaceUseCase,
    UpdateWorkspaceCommand,
    UpdateWorkspaceUseCase,
)
from engagement.depends import get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/workspaces",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_admin_api_key)],
)
async def create_workspace(
    request: CreateWorkspaceCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Workspace

    Provisions a workspace, optionally with an owner who becomes its ADMIN.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: owner user does not exist
        - 409 Conflict: slug already taken
        - 422 Unprocessable Entity: invalid slug or name
    """
    result = await CreateWorkspaceUseCase(uow).execute(request)
    return envelope(result)


@router.patch(
    "/workspaces/{slug}",
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_admin_api_key)],
)
async def update_workspace(
    slug: str,
    request: UpdateWorkspaceCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Workspace

    Renames, publishes or soft-disables a workspace. Workspaces are never
    hard-deleted.

    Requires: X-Admin-API-Key header
    """
    result = await UpdateWorkspaceUseCase(uow).execute(slug, request)
    return envelope(result)
