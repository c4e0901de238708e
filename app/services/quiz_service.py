"""
Quiz scoring and attempt recording
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.config import settings
from app.models import Quiz, QuizQuestion, QuizAttempt
from app.services.progression_service import progression_service

logger = logging.getLogger(__name__)


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class QuizService:
    """
    Service for scoring quiz submissions

    Strategy:
    - Exact, case-sensitive match of the submitted string against the
      stored correct answer; no normalization
    - XP is the quiz reward scaled by the fraction of correct answers
    - Every submission is stored and credited; repeats are not capped
    """

    def score_answers(
        self,
        questions: List[QuizQuestion],
        answers: Dict[str, str]
    ) -> Tuple[int, int]:
        """
        Count correct answers

        Args:
            questions: Questions of the quiz
            answers: Submitted answers keyed by question id

        Returns:
            Tuple of (correct_count, total_questions)
        """
        correct = 0

        for question in questions:
            submitted = answers.get(str(question.id))
            if submitted is not None and submitted == question.correct_answer:
                correct += 1

        return correct, len(questions)

    def score_percentage(self, correct: int, total: int) -> int:
        if total == 0:
            return 0
        return round_half_up(Decimal(correct * 100) / Decimal(total))

    def xp_for_quiz(self, xp_reward: int, correct: int, total: int) -> int:
        """round(xp_reward * correct / total)"""
        if total == 0:
            return 0
        return round_half_up(Decimal(xp_reward) * Decimal(correct) / Decimal(total))

    def grade(self, quiz: Quiz, questions: List[QuizQuestion], answers: Dict[str, str]) -> Dict[str, int]:
        """Grade a submission server-side into the attempt fields"""
        correct, total = self.score_answers(questions, answers)
        xp_reward = quiz.xp_reward if quiz.xp_reward is not None else settings.DEFAULT_QUIZ_XP_REWARD

        return {
            "score": self.score_percentage(correct, total),
            "total_questions": total,
            "correct_answers": correct,
            "xp_earned": self.xp_for_quiz(xp_reward, correct, total),
        }

    def record_attempt(
        self,
        db: Session,
        user_id: str,
        quiz_id: int,
        score: int,
        total_questions: int,
        correct_answers: int,
        xp_earned: int
    ) -> QuizAttempt:
        """
        Append a QuizAttempt and credit its XP when positive

        The attempt and the XP credit are committed together; if either
        fails neither is stored.
        """
        attempt = QuizAttempt(
            user_id=user_id,
            quiz_id=quiz_id,
            score=score,
            total_questions=total_questions,
            correct_answers=correct_answers,
            xp_earned=xp_earned,
        )

        try:
            db.add(attempt)
            if xp_earned > 0:
                progression_service.award_xp(db, user_id, xp_earned, commit=False)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(attempt)

        logger.info(
            f"Quiz attempt saved: {attempt.id}, user={user_id}, quiz={quiz_id}, "
            f"score={score}%, correct={correct_answers}/{total_questions}, xp={xp_earned}"
        )

        return attempt

    def list_user_attempts(self, db: Session, user_id: str) -> List[QuizAttempt]:
        return (
            db.query(QuizAttempt)
            .filter(QuizAttempt.user_id == user_id)
            .order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
            .all()
        )

    def get_quiz(self, db: Session, quiz_id: int) -> Optional[Quiz]:
        return db.query(Quiz).filter(Quiz.id == quiz_id).first()

    def get_questions(self, db: Session, quiz_id: int) -> List[QuizQuestion]:
        return (
            db.query(QuizQuestion)
            .filter(QuizQuestion.quiz_id == quiz_id)
            .order_by(QuizQuestion.order, QuizQuestion.id)
            .all()
        )


# Global instance
quiz_service = QuizService()
