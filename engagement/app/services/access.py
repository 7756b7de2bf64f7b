"""
Workspace access checks shared by every workspace-scoped use case.
"""

from typing import Iterable, Optional
from uuid import UUID

from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import Membership, MembershipRole, User, Workspace
from engagement.domain.errors import AuthorizationError, NotFoundError

MANAGE_ROLES = (MembershipRole.admin, MembershipRole.manager)
ADMIN_ONLY = (MembershipRole.admin,)


def resolve_workspace_role(
    membership: Optional[Membership], user: Optional[User], workspace_id: UUID
) -> Optional[MembershipRole]:
    """
    Resolve a user's role in a workspace.

    The membership row always wins. The legacy single-workspace role on the
    user is only consulted when no membership exists and it points at this
    workspace.
    """
    if membership is not None:
        return membership.role
    if user is not None and user.legacy_role is not None and user.legacy_workspace_id == workspace_id:
        return user.legacy_role
    return None


async def get_active_workspace(uow: UnitOfWork, slug: str) -> Workspace:
    workspace = await uow.workspaces.get_by_slug(slug)
    if workspace is None or not workspace.active:
        raise NotFoundError("Workspace", slug)
    return workspace


async def require_role(
    uow: UnitOfWork,
    workspace: Workspace,
    user_id: UUID,
    roles: Optional[Iterable[MembershipRole]] = None,
) -> MembershipRole:
    """
    Return the caller's role, raising FORBIDDEN when they are not a member
    or their role is not among ``roles``.
    """
    membership = await uow.memberships.get_by_user_and_workspace(user_id, workspace.id)
    user = None
    if membership is None:
        user = await uow.users.get_by_id(user_id)

    role = resolve_workspace_role(membership, user, workspace.id)
    if role is None:
        raise AuthorizationError("You are not a member of this workspace")

    if roles is not None and role not in tuple(roles):
        allowed = ", ".join(r.value for r in roles)
        raise AuthorizationError(f"This action requires one of: {allowed}")

    return role
