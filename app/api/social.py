"""
Leaderboards, friends, badges and reader stats
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.api.deps import get_current_user
from app.database import get_db
from app.models import User
from app.schemas.badge import BadgeResponse, UserBadgeResponse
from app.schemas.user import (
    LeaderboardEntry, PublicUser, FriendCreate, FriendshipResponse, UserStats
)
from app.services.badge_service import badge_service
from app.services.leaderboard_service import leaderboard_service
from app.services.stats_service import stats_service

router = APIRouter(prefix="/api", tags=["social"])
logger = logging.getLogger(__name__)


def _ranked(users: List[User]) -> List[LeaderboardEntry]:
    return [
        LeaderboardEntry(rank=position, **PublicUser.model_validate(u).model_dump())
        for position, u in enumerate(users, start=1)
    ]


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def get_leaderboard(
    limit: Optional[int] = Query(None, ge=1),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Top readers by XP"""
    return _ranked(leaderboard_service.get_leaderboard(db, limit))


@router.get("/leaderboard/friends", response_model=List[LeaderboardEntry])
def get_friends_leaderboard(
    limit: Optional[int] = Query(None, ge=1),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """The reader and their accepted friends by XP"""
    return _ranked(leaderboard_service.get_friends_leaderboard(db, user.id, limit))


@router.get("/user/friends", response_model=List[PublicUser])
def list_friends(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return leaderboard_service.get_user_friends(db, user.id)


@router.post("/user/friends", response_model=FriendshipResponse, status_code=201)
def add_friend(
    body: FriendCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if body.friend_id == user.id:
        raise HTTPException(status_code=400, detail="Cannot add yourself as a friend")

    if not db.query(User).filter(User.id == body.friend_id).first():
        raise HTTPException(status_code=404, detail="User not found")

    return leaderboard_service.add_friend(db, user.id, body.friend_id)


@router.get("/badges", response_model=List[BadgeResponse])
def list_badges(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return badge_service.list_badges(db)


@router.get("/user/badges", response_model=List[UserBadgeResponse])
def list_user_badges(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return badge_service.list_user_badges(db, user.id)


@router.get("/user/stats", response_model=UserStats)
def get_user_stats(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Dashboard summary: chapters read, quiz results, badges, and how much
    XP is left before the next level
    """
    return stats_service.get_user_stats(db, user.id)
