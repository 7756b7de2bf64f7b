"""
Challenge Catalog Use Cases
"""

from .create_activity_use_case import CreateActivityUseCase
from .create_challenge_use_case import CreateChallengeUseCase
from .dtos import (
    ActivityResponse,
    ChallengeResponse,
    CreateActivityCommand,
    CreateChallengeCommand,
)
from .list_challenges_use_case import ListChallengesUseCase

__all__ = [
    "CreateActivityUseCase",
    "CreateChallengeUseCase",
    "ListChallengesUseCase",
    "ActivityResponse",
    "ChallengeResponse",
    "CreateActivityCommand",
    "CreateChallengeCommand",
]
