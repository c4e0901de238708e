"""
Admin content management endpoints

Every route requires an admin session (see app.api.deps.get_current_admin).
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List
import logging

from app.api.deps import AdminContext, get_current_admin
from app.database import get_db
from app.models import User
from app.schemas.badge import BadgeCreate, BadgeResponse, BadgeAward, BadgeAwardResponse, UserBadgeResponse
from app.schemas.challenge import (
    AdminChallenges,
    DailyChallengeCreate,
    DailyChallengeResponse,
    WeeklyChallengeCreate,
    WeeklyChallengeResponse,
)
from app.schemas.chapter import ChapterCreate, ChapterUpdate, ChapterResponse
from app.schemas.common import MessageResponse
from app.schemas.glossary import GlossaryTermCreate, GlossaryTermUpdate, GlossaryTermResponse
from app.schemas.quiz import (
    QuizCreate,
    QuizUpdate,
    QuizResponse,
    QuestionCreate,
    QuestionUpdate,
    QuestionAdminResponse,
)
from app.services.badge_service import badge_service
from app.services.challenge_service import challenge_service
from app.services.content_service import content_service
from app.services.quiz_service import quiz_service
from app.utils.cache import cache_service, CHAPTERS_KEY, quiz_questions_key

router = APIRouter(prefix="/api/admin", tags=["admin"])
logger = logging.getLogger(__name__)


# Chapters

@router.post("/chapters", response_model=ChapterResponse, status_code=201)
def create_chapter(
    body: ChapterCreate,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        chapter = content_service.create_chapter(db, body.model_dump())
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=f"Chapter number {body.number} already exists")

    cache_service.delete(CHAPTERS_KEY)
    logger.info(f"Admin {admin.username} created chapter {chapter.id}")
    return chapter


@router.patch("/chapters/{chapter_id}", response_model=ChapterResponse)
def update_chapter(
    chapter_id: int,
    body: ChapterUpdate,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        chapter = content_service.update_chapter(db, chapter_id, body.model_dump(exclude_unset=True))
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=f"Chapter number {body.number} already exists")

    if not chapter:
        raise HTTPException(status_code=404, detail="Chapter not found")

    cache_service.delete(CHAPTERS_KEY)
    return chapter


@router.delete("/chapters/{chapter_id}", response_model=MessageResponse)
def delete_chapter(
    chapter_id: int,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        deleted = content_service.delete_chapter(db, chapter_id)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if not deleted:
        raise HTTPException(status_code=404, detail="Chapter not found")

    cache_service.clear_content()
    logger.info(f"Admin {admin.username} deleted chapter {chapter_id}")
    return {"message": "Chapter deleted successfully"}


# Glossary

@router.post("/glossary", response_model=GlossaryTermResponse, status_code=201)
def create_glossary_term(
    body: GlossaryTermCreate,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return content_service.create_glossary_term(db, body.model_dump())


@router.patch("/glossary/{term_id}", response_model=GlossaryTermResponse)
def update_glossary_term(
    term_id: int,
    body: GlossaryTermUpdate,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    term = content_service.update_glossary_term(db, term_id, body.model_dump(exclude_unset=True))
    if not term:
        raise HTTPException(status_code=404, detail="Term not found")
    return term


@router.delete("/glossary/{term_id}", response_model=MessageResponse)
def delete_glossary_term(
    term_id: int,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    if not content_service.delete_glossary_term(db, term_id):
        raise HTTPException(status_code=404, detail="Term not found")
    return {"message": "Term deleted successfully"}


# Quizzes and questions

@router.get("/quizzes", response_model=List[QuizResponse])
def list_quizzes(
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return content_service.list_quizzes(db)


@router.post("/quizzes", response_model=QuizResponse, status_code=201)
def create_quiz(
    body: QuizCreate,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    if not content_service.get_chapter(db, body.chapter_id):
        raise HTTPException(status_code=404, detail="Chapter not found")
    return content_service.create_quiz(db, body.model_dump())


@router.patch("/quizzes/{quiz_id}", response_model=QuizResponse)
def update_quiz(
    quiz_id: int,
    body: QuizUpdate,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    data = body.model_dump(exclude_unset=True)
    if "chapter_id" in data and not content_service.get_chapter(db, data["chapter_id"]):
        raise HTTPException(status_code=404, detail="Chapter not found")

    quiz = content_service.update_quiz(db, quiz_id, data)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return quiz


@router.delete("/quizzes/{quiz_id}", response_model=MessageResponse)
def delete_quiz(
    quiz_id: int,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    try:
        deleted = content_service.delete_quiz(db, quiz_id)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if not deleted:
        raise HTTPException(status_code=404, detail="Quiz not found")

    cache_service.delete(quiz_questions_key(quiz_id))
    return {"message": "Quiz deleted successfully"}


@router.get("/quizzes/{quiz_id}/questions", response_model=List[QuestionAdminResponse])
def list_quiz_questions(
    quiz_id: int,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Questions with their answer keys"""
    if not content_service.get_quiz(db, quiz_id):
        raise HTTPException(status_code=404, detail="Quiz not found")

    return quiz_service.get_questions(db, quiz_id)


@router.post("/quizzes/{quiz_id}/questions", response_model=QuestionAdminResponse, status_code=201)
def create_question(
    quiz_id: int,
    body: QuestionCreate,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    if not content_service.get_quiz(db, quiz_id):
        raise HTTPException(status_code=404, detail="Quiz not found")

    question = content_service.create_question(db, quiz_id, body.model_dump())
    cache_service.delete(quiz_questions_key(quiz_id))
    return question


@router.patch("/questions/{question_id}", response_model=QuestionAdminResponse)
def update_question(
    question_id: int,
    body: QuestionUpdate,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    question = content_service.update_question(db, question_id, body.model_dump(exclude_unset=True))
    if not question:
        raise HTTPException(status_code=404, detail="Question not found")

    cache_service.delete(quiz_questions_key(question.quiz_id))
    return question


@router.delete("/questions/{question_id}", response_model=MessageResponse)
def delete_question(
    question_id: int,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    quiz_id = content_service.delete_question(db, question_id)
    if quiz_id is None:
        raise HTTPException(status_code=404, detail="Question not found")

    cache_service.delete(quiz_questions_key(quiz_id))
    return {"message": "Question deleted successfully"}


# Challenges

@router.get("/challenges", response_model=AdminChallenges)
def list_challenges(
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return challenge_service.list_challenges(db)


@router.post("/challenges/daily", response_model=DailyChallengeResponse, status_code=201)
def create_daily_challenge(
    body: DailyChallengeCreate,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return challenge_service.create_daily_challenge(db, body.model_dump())


@router.post("/challenges/weekly", response_model=WeeklyChallengeResponse, status_code=201)
def create_weekly_challenge(
    body: WeeklyChallengeCreate,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    if body.badge_reward is not None and not badge_service.get_badge(db, body.badge_reward):
        raise HTTPException(status_code=404, detail="Badge not found")
    return challenge_service.create_weekly_challenge(db, body.model_dump())


# Badges

@router.post("/badges", response_model=BadgeResponse, status_code=201)
def create_badge(
    body: BadgeCreate,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return badge_service.create_badge(db, body.model_dump())


@router.post("/badges/{badge_id}/award", response_model=BadgeAwardResponse)
def award_badge(
    badge_id: int,
    body: BadgeAward,
    admin: AdminContext = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Award a badge to a reader; awarding it again is a no-op"""

    if not badge_service.get_badge(db, badge_id):
        raise HTTPException(status_code=404, detail="Badge not found")
    if not db.query(User).filter(User.id == body.user_id).first():
        raise HTTPException(status_code=404, detail="User not found")

    user_badge, created = badge_service.award_badge(db, body.user_id, badge_id)
    logger.info(f"Admin {admin.username} awarded badge {badge_id} to {body.user_id} (new={created})")

    return BadgeAwardResponse(user_badge=UserBadgeResponse.model_validate(user_badge), created=created)
