"""
Membership Registry Use Cases

All membership-related business logic.
"""

from .change_role_use_case import ChangeRoleUseCase
from .create_membership_use_case import CreateMembershipUseCase
from .dtos import (
    CreateMembershipCommand,
    MembershipResponse,
    RemoveMembershipResponse,
    TransferOwnershipResponse,
)
from .get_membership_use_case import GetMembershipUseCase
from .list_memberships_use_case import ListMembershipsUseCase, ListWorkspaceMembershipsUseCase
from .remove_membership_use_case import RemoveMembershipUseCase
from .set_primary_membership_use_case import SetPrimaryMembershipUseCase
from .transfer_ownership_use_case import TransferOwnershipUseCase

__all__ = [
    "ChangeRoleUseCase",
    "CreateMembershipUseCase",
    "GetMembershipUseCase",
    "ListMembershipsUseCase",
    "ListWorkspaceMembershipsUseCase",
    "RemoveMembershipUseCase",
    "SetPrimaryMembershipUseCase",
    "TransferOwnershipUseCase",
    "CreateMembershipCommand",
    "MembershipResponse",
    "RemoveMembershipResponse",
    "TransferOwnershipResponse",
]
