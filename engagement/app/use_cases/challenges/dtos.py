"""
Challenge Catalog DTOs (Data Transfer Objects)
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from engagement.domain.entities import Activity, Challenge, RewardType


class CreateChallengeCommand(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    reward_type: Optional[RewardType] = None
    reward_config: Optional[Dict[str, Any]] = None


class CreateActivityCommand(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    points_value: int = Field(10, ge=0)


class ActivityResponse(BaseModel):
    id: str
    challenge_id: str
    name: str
    points_value: int

    @classmethod
    def from_entity(cls, activity: Activity) -> "ActivityResponse":
        return cls(
            id=str(activity.id),
            challenge_id=str(activity.challenge_id),
            name=activity.name,
            points_value=activity.points_value,
        )


class ChallengeResponse(BaseModel):
    id: str
    workspace_id: str
    title: str
    reward_type: Optional[str] = None
    reward_config: Optional[Dict[str, Any]] = None
    activities: List[ActivityResponse] = []
    created_at: str

    @classmethod
    def from_entity(
        cls, challenge: Challenge, activities: Optional[List[Activity]] = None
    ) -> "ChallengeResponse":
        return cls(
            id=str(challenge.id),
            workspace_id=str(challenge.workspace_id),
            title=challenge.title,
            reward_type=challenge.reward_type.value if challenge.reward_type else None,
            reward_config=challenge.reward_config,
            activities=[ActivityResponse.from_entity(a) for a in activities or []],
            created_at=challenge.created_at.isoformat(),
        )
