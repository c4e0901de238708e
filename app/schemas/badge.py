"""
Pydantic schemas for badges
"""
from pydantic import Field
from typing import Any, Optional
from datetime import datetime

from app.schemas.common import CamelModel


class BadgeCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    icon: str = Field(..., min_length=1, max_length=50)
    type: str = Field(..., pattern="^(achievement|streak|chapter|quiz)$")
    requirement: Optional[Any] = None
    xp_reward: int = Field(0, ge=0)


class BadgeResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    icon: str
    type: str
    requirement: Optional[Any] = None
    xp_reward: Optional[int] = None


class UserBadgeResponse(CamelModel):
    id: int
    user_id: str
    badge_id: int
    earned_at: Optional[datetime] = None


class BadgeAward(CamelModel):
    user_id: str = Field(..., min_length=1)


class BadgeAwardResponse(CamelModel):
    user_badge: UserBadgeResponse
    created: bool
