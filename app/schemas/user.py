"""
Pydantic schemas for users, friends, leaderboards and stats
"""
from pydantic import Field
from typing import Optional
from datetime import datetime

from app.schemas.common import CamelModel


class UserResponse(CamelModel):
    """The signed-in reader's own profile"""
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    level: int
    xp: int
    coins: int
    streak: int
    last_login_date: Optional[datetime] = None


class PublicUser(CamelModel):
    """Another reader as seen by friends and leaderboards (no email)"""
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    level: int
    xp: int
    streak: int


class LeaderboardEntry(PublicUser):
    rank: int


class FriendCreate(CamelModel):
    friend_id: str = Field(..., min_length=1)


class FriendshipResponse(CamelModel):
    id: int
    user_id: str
    friend_id: str
    status: str
    created_at: Optional[datetime] = None


class UserStats(CamelModel):
    """Dashboard summary for a reader"""
    user_id: str
    level: int
    xp: int
    xp_to_next_level: int
    coins: int
    streak: int
    total_chapters: int
    completed_chapters: int
    quiz_attempts: int
    average_quiz_score: float
    perfect_quizzes: int
    quiz_xp_earned: int
    badges: int
