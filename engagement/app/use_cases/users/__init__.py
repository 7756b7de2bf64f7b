"""
User Use Cases

Identity resolution and the caller's own context.
"""

from .dtos import CurrentUser, UserContextResponse, UserResponse, WorkspaceContext
from .load_context_use_case import LoadContextUseCase
from .resolve_user_use_case import ResolveUserUseCase

__all__ = [
    "CurrentUser",
    "LoadContextUseCase",
    "ResolveUserUseCase",
    "UserContextResponse",
    "UserResponse",
    "WorkspaceContext",
]
