"""
Pydantic schemas for quiz-related requests and responses
"""
from pydantic import Field, model_validator
from typing import Dict, List, Optional
from datetime import datetime

from app.schemas.common import CamelModel

QUESTION_TYPE_PATTERN = "^(multiple_choice|true_false)$"


class QuizCreate(CamelModel):
    chapter_id: int
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    xp_reward: int = Field(50, ge=0)


class QuizUpdate(CamelModel):
    chapter_id: Optional[int] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    xp_reward: Optional[int] = Field(None, ge=0)


class QuizResponse(CamelModel):
    id: int
    chapter_id: int
    title: str
    description: Optional[str] = None
    xp_reward: Optional[int] = None
    created_at: Optional[datetime] = None


class QuestionCreate(CamelModel):
    """Individual quiz question"""
    question: str = Field(..., min_length=1)
    type: str = Field(..., pattern=QUESTION_TYPE_PATTERN)
    options: Optional[List[str]] = None  # For multiple choice
    correct_answer: str = Field(..., min_length=1)
    explanation: Optional[str] = None
    points: int = Field(10, ge=0)
    order: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_options(self):
        if self.type == "multiple_choice" and not self.options:
            raise ValueError("multiple_choice questions need options")
        if self.options and self.correct_answer not in self.options:
            raise ValueError("correct_answer must be one of the options")
        return self


class QuestionUpdate(CamelModel):
    question: Optional[str] = Field(None, min_length=1)
    type: Optional[str] = Field(None, pattern=QUESTION_TYPE_PATTERN)
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = Field(None, min_length=1)
    explanation: Optional[str] = None
    points: Optional[int] = Field(None, ge=0)
    order: Optional[int] = Field(None, ge=0)


class QuestionResponse(CamelModel):
    """A question as served to readers, without its answer key"""
    id: int
    quiz_id: int
    question: str
    type: str
    options: Optional[List[str]] = None
    points: Optional[int] = None
    order: int


class QuestionAdminResponse(QuestionResponse):
    correct_answer: str
    explanation: Optional[str] = None


class QuizAttemptCreate(CamelModel):
    """
    Quiz submission

    Either the answers (scored by the server) or the client-computed
    result fields. When answers are present they take precedence.
    """
    answers: Optional[Dict[str, str]] = None  # {question_id: answer}
    score: Optional[int] = Field(None, ge=0, le=100)
    total_questions: Optional[int] = Field(None, ge=0)
    correct_answers: Optional[int] = Field(None, ge=0)
    xp_earned: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_payload(self):
        if self.answers is not None:
            return self
        if self.total_questions is None:
            raise ValueError("Either answers or totalQuestions is required")
        if self.correct_answers is not None and self.correct_answers > self.total_questions:
            raise ValueError("correctAnswers cannot exceed totalQuestions")
        return self


class QuizAttemptResponse(CamelModel):
    id: int
    user_id: str
    quiz_id: int
    score: int
    total_questions: int
    correct_answers: int
    xp_earned: int
    completed_at: Optional[datetime] = None
