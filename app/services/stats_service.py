"""
Reader statistics for the dashboard
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import User, Chapter, ChapterProgress, QuizAttempt, UserBadge
from app.services.progression_service import progression_service

logger = logging.getLogger(__name__)


class StatsService:
    """Aggregate a reader's progress, quiz results and badges"""

    def get_user_stats(self, db: Session, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get the dashboard summary for a user

        Args:
            db: Database session
            user_id: User id

        Returns:
            Dictionary with progress metrics, or None for an unknown user
        """
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            return None

        total_chapters = db.query(func.count(Chapter.id)).scalar() or 0

        completed_chapters = db.query(func.count(ChapterProgress.id)).filter(
            ChapterProgress.user_id == user_id,
            ChapterProgress.is_completed.is_(True)
        ).scalar() or 0

        attempts_count, avg_score, quiz_xp = db.query(
            func.count(QuizAttempt.id),
            func.avg(QuizAttempt.score),
            func.sum(QuizAttempt.xp_earned)
        ).filter(QuizAttempt.user_id == user_id).one()

        perfect_quizzes = db.query(func.count(QuizAttempt.id)).filter(
            QuizAttempt.user_id == user_id,
            QuizAttempt.score >= 100
        ).scalar() or 0

        badges = db.query(func.count(UserBadge.id)).filter(
            UserBadge.user_id == user_id
        ).scalar() or 0

        xp = user.xp or 0

        return {
            "user_id": user.id,
            "level": user.level,
            "xp": xp,
            "xp_to_next_level": progression_service.xp_to_next_level(xp),
            "coins": user.coins or 0,
            "streak": user.streak or 0,
            "total_chapters": total_chapters,
            "completed_chapters": completed_chapters,
            "quiz_attempts": attempts_count or 0,
            "average_quiz_score": round(float(avg_score), 2) if avg_score is not None else 0.0,
            "perfect_quizzes": perfect_quizzes,
            "quiz_xp_earned": int(quiz_xp or 0),
            "badges": badges,
        }


# Global instance
stats_service = StatsService()
