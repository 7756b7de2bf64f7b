"""
Membership creation shared by workspace creation, direct adds and invite
redemption.
"""

from uuid import UUID

from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import Membership, MembershipRole


async def add_membership(
    uow: UnitOfWork,
    user_id: UUID,
    workspace_id: UUID,
    role: MembershipRole,
    is_primary: bool = False,
    is_owner: bool = False,
) -> Membership:
    """
    Create a membership inside the caller's transaction.

    When ``is_primary`` is set the user's previous primary is cleared first;
    a user without any primary always gets this one as primary.
    """
    current_primary = await uow.memberships.get_primary(user_id)
    if is_primary and current_primary is not None:
        await uow.memberships.clear_primary(user_id)

    membership = Membership(
        user_id=user_id,
        workspace_id=workspace_id,
        role=role,
        is_primary=is_primary or current_primary is None,
        is_owner=is_owner,
    )
    return await uow.memberships.create(membership)
