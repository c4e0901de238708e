"""
Quiz and QuizQuestion models
"""
from sqlalchemy import Column, String, Integer, Text, TIMESTAMP, ForeignKey
from app.database import Base
from app.models.types import JSONType
from app.utils.clock import utcnow

QUESTION_TYPES = ("multiple_choice", "true_false")


class Quiz(Base):
    """
    Quizzes table - one chapter has many quizzes
    """
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    chapter_id = Column(Integer, ForeignKey("chapters.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    xp_reward = Column(Integer, default=50)
    created_at = Column(TIMESTAMP, default=utcnow)

    def __repr__(self):
        return f"<Quiz(id={self.id}, chapter_id={self.chapter_id}, title={self.title})>"


class QuizQuestion(Base):
    """
    Quiz questions table - presented in ascending `order`
    """
    __tablename__ = "quiz_questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)  # multiple_choice, true_false
    options = Column(JSONType)  # ["A", "B", "C"] for multiple choice
    correct_answer = Column(Text, nullable=False)
    explanation = Column(Text)
    points = Column(Integer, default=10)
    order = Column(Integer, nullable=False)

    def __repr__(self):
        return f"<QuizQuestion(id={self.id}, quiz_id={self.quiz_id}, order={self.order})>"
