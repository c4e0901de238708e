"""
Chapter reading API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
import logging

from app.api.deps import get_current_user
from app.database import get_db
from app.models import User
from app.schemas.chapter import ChapterResponse, ProgressUpdate, ProgressResponse
from app.schemas.quiz import QuizResponse
from app.services.content_service import content_service
from app.utils.cache import cache_service, CHAPTERS_KEY

router = APIRouter(prefix="/api", tags=["chapters"])
logger = logging.getLogger(__name__)


@router.get("/chapters", response_model=List[ChapterResponse])
def list_chapters(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all chapters ordered by number (cached)"""

    cached = cache_service.get(CHAPTERS_KEY)
    if cached is not None:
        return cached

    chapters = [
        ChapterResponse.model_validate(c).model_dump(mode="json", by_alias=True)
        for c in content_service.list_chapters(db)
    ]
    cache_service.set(CHAPTERS_KEY, chapters)

    return chapters


@router.get("/chapters/{chapter_id}", response_model=ChapterResponse)
def get_chapter(
    chapter_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    chapter = content_service.get_chapter(db, chapter_id)
    if not chapter:
        raise HTTPException(status_code=404, detail="Chapter not found")
    return chapter


@router.get("/user/progress", response_model=List[ProgressResponse])
def get_user_progress(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Reading progress of the signed-in reader across chapters"""
    return content_service.list_user_progress(db, user.id)


@router.post("/chapters/{chapter_id}/progress", response_model=ProgressResponse)
def update_progress(
    chapter_id: int,
    progress: ProgressUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Record reading progress for a chapter

    Creates the progress record on first write, updates it afterwards.
    """

    if not content_service.get_chapter(db, chapter_id):
        raise HTTPException(status_code=404, detail="Chapter not found")

    return content_service.update_chapter_progress(
        db,
        user_id=user.id,
        chapter_id=chapter_id,
        progress_percentage=progress.progress_percentage,
        is_completed=progress.is_completed,
        completed_at=progress.completed_at,
    )


@router.get("/chapters/{chapter_id}/quizzes", response_model=List[QuizResponse])
def list_chapter_quizzes(
    chapter_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not content_service.get_chapter(db, chapter_id):
        raise HTTPException(status_code=404, detail="Chapter not found")
    return content_service.list_chapter_quizzes(db, chapter_id)
