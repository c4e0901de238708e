"""
Pydantic schemas for daily and weekly challenges
"""
from pydantic import Field, model_validator
from typing import Any, List, Optional
from datetime import datetime

from app.schemas.common import CamelModel


class DailyChallengeCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, max_length=50)  # quiz, reading, streak
    requirement: Optional[Any] = None
    xp_reward: int = Field(100, ge=0)
    coin_reward: int = Field(0, ge=0)
    date: datetime
    is_active: bool = True


class DailyChallengeResponse(CamelModel):
    id: int
    title: str
    description: str
    type: str
    requirement: Optional[Any] = None
    xp_reward: Optional[int] = None
    coin_reward: Optional[int] = None
    date: datetime
    is_active: bool


class WeeklyChallengeCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, max_length=50)
    requirement: Optional[Any] = None
    xp_reward: int = Field(500, ge=0)
    coin_reward: int = Field(100, ge=0)
    badge_reward: Optional[int] = None
    start_date: datetime
    end_date: datetime
    is_active: bool = True

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class WeeklyChallengeResponse(CamelModel):
    id: int
    title: str
    description: str
    type: str
    requirement: Optional[Any] = None
    xp_reward: Optional[int] = None
    coin_reward: Optional[int] = None
    badge_reward: Optional[int] = None
    start_date: datetime
    end_date: datetime
    is_active: bool


class ChallengeProgressUpdate(CamelModel):
    progress: int = Field(..., ge=0)


class ChallengeProgressResponse(CamelModel):
    id: int
    user_id: str
    challenge_id: int
    progress: int
    is_completed: bool
    completed_at: Optional[datetime] = None


class AdminChallenges(CamelModel):
    daily: List[DailyChallengeResponse]
    weekly: List[WeeklyChallengeResponse]
