"""
Quiz taking API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
import logging

from app.api.deps import get_current_user
from app.database import get_db
from app.models import User
from app.schemas.quiz import (
    QuizResponse,
    QuestionResponse,
    QuizAttemptCreate,
    QuizAttemptResponse,
)
from app.services.quiz_service import quiz_service
from app.utils.cache import cache_service, quiz_questions_key

router = APIRouter(prefix="/api", tags=["quizzes"])
logger = logging.getLogger(__name__)


@router.get("/quizzes/{quiz_id}", response_model=QuizResponse)
def get_quiz(
    quiz_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    quiz = quiz_service.get_quiz(db, quiz_id)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return quiz


@router.get("/quizzes/{quiz_id}/questions", response_model=List[QuestionResponse])
def get_quiz_questions(
    quiz_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Questions of a quiz in presentation order

    Answer keys are never sent to readers. Cached per quiz.
    """

    cache_key = quiz_questions_key(quiz_id)
    cached = cache_service.get(cache_key)
    if cached is not None:
        return cached

    if not quiz_service.get_quiz(db, quiz_id):
        raise HTTPException(status_code=404, detail="Quiz not found")

    questions = [
        QuestionResponse.model_validate(q).model_dump(mode="json", by_alias=True)
        for q in quiz_service.get_questions(db, quiz_id)
    ]
    cache_service.set(cache_key, questions)

    return questions


@router.post("/quizzes/{quiz_id}/attempt", response_model=QuizAttemptResponse)
def submit_attempt(
    quiz_id: int,
    submission: QuizAttemptCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Submit a completed quiz

    Scoring:
    - With `answers`: exact match against the stored answer key,
      XP = round(xpReward * correct / total)
    - Without: the client-computed result is recorded as sent

    Every submission is stored and its XP credited.
    """

    quiz = quiz_service.get_quiz(db, quiz_id)
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")

    if submission.answers is not None:
        questions = quiz_service.get_questions(db, quiz_id)
        result = quiz_service.grade(quiz, questions, submission.answers)
    else:
        correct = submission.correct_answers or 0
        result = {
            "score": submission.score if submission.score is not None
            else quiz_service.score_percentage(correct, submission.total_questions),
            "total_questions": submission.total_questions,
            "correct_answers": correct,
            "xp_earned": submission.xp_earned or 0,
        }

    logger.info(f"Grading quiz {quiz_id} for user {user.id}: {result}")

    return quiz_service.record_attempt(db, user_id=user.id, quiz_id=quiz_id, **result)


@router.get("/user/attempts", response_model=List[QuizAttemptResponse])
def list_attempts(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """The reader's quiz history, newest first"""
    return quiz_service.list_user_attempts(db, user.id)
