"""
Workspace Directory Use Cases

Creation, lookup and soft-disable of workspaces.
"""

from .create_workspace_use_case import CreateWorkspaceUseCase
from .dtos import CreateWorkspaceCommand, UpdateWorkspaceCommand, WorkspaceResponse
from .get_workspace_use_case import GetWorkspaceUseCase
from .update_workspace_use_case import UpdateWorkspaceUseCase

__all__ = [
    "CreateWorkspaceUseCase",
    "GetWorkspaceUseCase",
    "UpdateWorkspaceUseCase",
    "CreateWorkspaceCommand",
    "UpdateWorkspaceCommand",
    "WorkspaceResponse",
]
