"""
Database models package
"""
from app.models.user import User, AdminUser
from app.models.chapter import Chapter
from app.models.user_progress import ChapterProgress
from app.models.quiz import Quiz, QuizQuestion
from app.models.quiz_attempt import QuizAttempt
from app.models.badge import Badge, UserBadge
from app.models.challenge import (
    DailyChallenge, UserDailyChallenge, WeeklyChallenge, UserWeeklyChallenge
)
from app.models.friendship import Friendship
from app.models.glossary import GlossaryTerm

__all__ = [
    "User", "AdminUser", "Chapter", "ChapterProgress", "Quiz", "QuizQuestion",
    "QuizAttempt", "Badge", "UserBadge", "DailyChallenge", "UserDailyChallenge",
    "WeeklyChallenge", "UserWeeklyChallenge", "Friendship", "GlossaryTerm",
]
