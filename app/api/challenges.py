"""
Daily and weekly challenge endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional
import logging

from app.api.deps import get_current_user
from app.database import get_db
from app.models import User
from app.schemas.challenge import (
    DailyChallengeResponse,
    WeeklyChallengeResponse,
    ChallengeProgressUpdate,
    ChallengeProgressResponse,
)
from app.services.challenge_service import challenge_service

router = APIRouter(prefix="/api", tags=["challenges"])
logger = logging.getLogger(__name__)


@router.get("/challenges/daily", response_model=Optional[DailyChallengeResponse])
def get_daily_challenge(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Today's active daily challenge, or null"""
    return challenge_service.get_todays_daily_challenge(db)


@router.get("/challenges/weekly", response_model=Optional[WeeklyChallengeResponse])
def get_weekly_challenge(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """The weekly challenge running now, or null"""
    return challenge_service.get_current_weekly_challenge(db)


@router.get("/user/challenges/daily/{challenge_id}", response_model=Optional[ChallengeProgressResponse])
def get_daily_progress(
    challenge_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return challenge_service.get_user_daily_progress(db, user.id, challenge_id)


@router.get("/user/challenges/weekly/{challenge_id}", response_model=Optional[ChallengeProgressResponse])
def get_weekly_progress(
    challenge_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return challenge_service.get_user_weekly_progress(db, user.id, challenge_id)


@router.post("/challenges/daily/{challenge_id}/progress", response_model=ChallengeProgressResponse)
def update_daily_progress(
    challenge_id: int,
    body: ChallengeProgressUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set the reader's progress; 100 or more completes the challenge"""

    if not challenge_service.get_daily_challenge(db, challenge_id):
        raise HTTPException(status_code=404, detail="Challenge not found")

    return challenge_service.update_daily_challenge_progress(db, user.id, challenge_id, body.progress)


@router.post("/challenges/weekly/{challenge_id}/progress", response_model=ChallengeProgressResponse)
def update_weekly_progress(
    challenge_id: int,
    body: ChallengeProgressUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not challenge_service.get_weekly_challenge(db, challenge_id):
        raise HTTPException(status_code=404, detail="Challenge not found")

    return challenge_service.update_weekly_challenge_progress(db, user.id, challenge_id, body.progress)
