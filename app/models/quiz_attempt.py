"""
QuizAttempt model - append-only record of quiz submissions
"""
from sqlalchemy import Column, String, Integer, TIMESTAMP, ForeignKey
from app.database import Base
from app.utils.clock import utcnow


class QuizAttempt(Base):
    """
    User quiz attempts table - never updated once written
    """
    __tablename__ = "user_quiz_attempts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), nullable=False, index=True)
    score = Column(Integer, nullable=False, default=0)  # percentage
    total_questions = Column(Integer, nullable=False)
    correct_answers = Column(Integer, nullable=False, default=0)
    xp_earned = Column(Integer, nullable=False, default=0)
    completed_at = Column(TIMESTAMP, default=utcnow)

    def __repr__(self):
        return f"<QuizAttempt(user_id={self.user_id}, quiz_id={self.quiz_id}, score={self.score})>"
