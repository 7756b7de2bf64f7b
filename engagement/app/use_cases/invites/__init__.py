"""
Invite Ledger Use Cases

All invite-code business logic.
"""

from .create_invite_use_case import CreateInviteUseCase, generate_invite_code
from .delete_invite_use_case import DeleteInviteUseCase
from .dtos import (
    CreateInviteCommand,
    InviteDetailsResponse,
    InviteResponse,
    RedeemInviteResponse,
)
from .get_invite_use_case import GetInviteUseCase
from .list_invites_use_case import ListInvitesUseCase
from .redeem_invite_use_case import RedeemInviteUseCase

__all__ = [
    "CreateInviteUseCase",
    "DeleteInviteUseCase",
    "GetInviteUseCase",
    "ListInvitesUseCase",
    "RedeemInviteUseCase",
    "CreateInviteCommand",
    "InviteDetailsResponse",
    "InviteResponse",
    "RedeemInviteResponse",
    "generate_invite_code",
]
