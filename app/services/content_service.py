"""
Content store: chapters, reading progress, quizzes, questions, glossary
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.models import (
    Chapter, ChapterProgress, Quiz, QuizQuestion, QuizAttempt, GlossaryTerm
)
from app.utils.clock import utcnow
from app.utils.upsert import insert_for

logger = logging.getLogger(__name__)


class ContentService:
    """CRUD over the editorial content and the reader's chapter progress"""

    # Chapters

    def list_chapters(self, db: Session) -> List[Chapter]:
        return db.query(Chapter).order_by(Chapter.number).all()

    def get_chapter(self, db: Session, chapter_id: int) -> Optional[Chapter]:
        return db.query(Chapter).filter(Chapter.id == chapter_id).first()

    def create_chapter(self, db: Session, data: Dict) -> Chapter:
        chapter = Chapter(**data)
        db.add(chapter)
        db.commit()
        db.refresh(chapter)
        logger.info(f"Chapter created: {chapter.id} (number {chapter.number})")
        return chapter

    def update_chapter(self, db: Session, chapter_id: int, data: Dict) -> Optional[Chapter]:
        chapter = self.get_chapter(db, chapter_id)
        if not chapter:
            return None

        for field, value in data.items():
            setattr(chapter, field, value)

        db.commit()
        db.refresh(chapter)
        logger.info(f"Chapter updated: {chapter_id} fields={sorted(data)}")
        return chapter

    def delete_chapter(self, db: Session, chapter_id: int) -> bool:
        """
        Delete a chapter with its quizzes, questions and progress rows

        Raises:
            ValueError: if any of its quizzes already has attempts
        """
        chapter = self.get_chapter(db, chapter_id)
        if not chapter:
            return False

        quiz_ids = [q.id for q in db.query(Quiz.id).filter(Quiz.chapter_id == chapter_id)]
        if quiz_ids and db.query(QuizAttempt).filter(QuizAttempt.quiz_id.in_(quiz_ids)).first():
            raise ValueError("Chapter has quizzes with recorded attempts")

        if quiz_ids:
            db.query(QuizQuestion).filter(QuizQuestion.quiz_id.in_(quiz_ids)).delete(synchronize_session=False)
            db.query(Quiz).filter(Quiz.id.in_(quiz_ids)).delete(synchronize_session=False)
        db.query(ChapterProgress).filter(ChapterProgress.chapter_id == chapter_id).delete(synchronize_session=False)
        db.delete(chapter)
        db.commit()

        logger.info(f"Chapter deleted: {chapter_id} with {len(quiz_ids)} quizzes")
        return True

    # Reading progress

    def list_user_progress(self, db: Session, user_id: str) -> List[ChapterProgress]:
        return (
            db.query(ChapterProgress)
            .filter(ChapterProgress.user_id == user_id)
            .order_by(ChapterProgress.chapter_id)
            .all()
        )

    def get_user_progress(self, db: Session, user_id: str, chapter_id: int) -> Optional[ChapterProgress]:
        return db.query(ChapterProgress).filter(
            ChapterProgress.user_id == user_id,
            ChapterProgress.chapter_id == chapter_id
        ).first()

    def update_chapter_progress(
        self,
        db: Session,
        user_id: str,
        chapter_id: int,
        progress_percentage: int,
        is_completed: Optional[bool] = None,
        completed_at: Optional[datetime] = None
    ) -> ChapterProgress:
        """
        Upsert the (user, chapter) progress row in a single statement

        Only the supplied fields are written on update. Completing without
        an explicit completed_at stamps the current time.
        """
        fields = {"progress_percentage": progress_percentage}
        if is_completed is not None:
            fields["is_completed"] = is_completed
            if is_completed:
                fields["completed_at"] = completed_at or utcnow()
        if completed_at is not None:
            fields["completed_at"] = completed_at

        stmt = insert_for(db, ChapterProgress).values(
            user_id=user_id,
            chapter_id=chapter_id,
            **fields
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "chapter_id"],
            set_={name: getattr(stmt.excluded, name) for name in fields}
        )

        db.execute(stmt)
        db.commit()
        db.expire_all()

        logger.info(
            f"Progress updated: user={user_id}, chapter={chapter_id}, "
            f"pct={progress_percentage}, completed={is_completed}"
        )

        return self.get_user_progress(db, user_id, chapter_id)

    # Quizzes

    def list_chapter_quizzes(self, db: Session, chapter_id: int) -> List[Quiz]:
        return db.query(Quiz).filter(Quiz.chapter_id == chapter_id).order_by(Quiz.id).all()

    def list_quizzes(self, db: Session) -> List[Quiz]:
        return db.query(Quiz).order_by(Quiz.chapter_id, Quiz.id).all()

    def get_quiz(self, db: Session, quiz_id: int) -> Optional[Quiz]:
        return db.query(Quiz).filter(Quiz.id == quiz_id).first()

    def create_quiz(self, db: Session, data: Dict) -> Quiz:
        quiz = Quiz(**data)
        db.add(quiz)
        db.commit()
        db.refresh(quiz)
        logger.info(f"Quiz created: {quiz.id} for chapter {quiz.chapter_id}")
        return quiz

    def update_quiz(self, db: Session, quiz_id: int, data: Dict) -> Optional[Quiz]:
        quiz = self.get_quiz(db, quiz_id)
        if not quiz:
            return None

        for field, value in data.items():
            setattr(quiz, field, value)

        db.commit()
        db.refresh(quiz)
        logger.info(f"Quiz updated: {quiz_id} fields={sorted(data)}")
        return quiz

    def delete_quiz(self, db: Session, quiz_id: int) -> bool:
        """
        Delete a quiz and its questions

        Raises:
            ValueError: if attempts were recorded against it
        """
        quiz = self.get_quiz(db, quiz_id)
        if not quiz:
            return False

        if db.query(QuizAttempt).filter(QuizAttempt.quiz_id == quiz_id).first():
            raise ValueError("Quiz has recorded attempts")

        db.query(QuizQuestion).filter(QuizQuestion.quiz_id == quiz_id).delete(synchronize_session=False)
        db.delete(quiz)
        db.commit()

        logger.info(f"Quiz deleted: {quiz_id}")
        return True

    # Questions

    def get_question(self, db: Session, question_id: int) -> Optional[QuizQuestion]:
        return db.query(QuizQuestion).filter(QuizQuestion.id == question_id).first()

    def create_question(self, db: Session, quiz_id: int, data: Dict) -> QuizQuestion:
        question = QuizQuestion(quiz_id=quiz_id, **data)
        db.add(question)
        db.commit()
        db.refresh(question)
        logger.info(f"Question created: {question.id} in quiz {quiz_id}")
        return question

    def update_question(self, db: Session, question_id: int, data: Dict) -> Optional[QuizQuestion]:
        question = self.get_question(db, question_id)
        if not question:
            return None

        for field, value in data.items():
            setattr(question, field, value)

        db.commit()
        db.refresh(question)
        return question

    def delete_question(self, db: Session, question_id: int) -> Optional[int]:
        """Delete a question, returning the id of the quiz it belonged to"""
        question = self.get_question(db, question_id)
        if not question:
            return None

        quiz_id = question.quiz_id
        db.delete(question)
        db.commit()
        return quiz_id

    # Glossary

    def list_glossary_terms(self, db: Session, category: Optional[str] = None) -> List[GlossaryTerm]:
        query = db.query(GlossaryTerm)
        if category:
            query = query.filter(GlossaryTerm.category == category)
        return query.order_by(GlossaryTerm.term, GlossaryTerm.id).all()

    def get_glossary_term(self, db: Session, term_id: int) -> Optional[GlossaryTerm]:
        return db.query(GlossaryTerm).filter(GlossaryTerm.id == term_id).first()

    def create_glossary_term(self, db: Session, data: Dict) -> GlossaryTerm:
        term = GlossaryTerm(**data)
        db.add(term)
        db.commit()
        db.refresh(term)
        logger.info(f"Glossary term created: {term.id} ({term.term})")
        return term

    def update_glossary_term(self, db: Session, term_id: int, data: Dict) -> Optional[GlossaryTerm]:
        term = self.get_glossary_term(db, term_id)
        if not term:
            return None

        for field, value in data.items():
            setattr(term, field, value)
        term.updated_at = utcnow()

        db.commit()
        db.refresh(term)
        return term

    def delete_glossary_term(self, db: Session, term_id: int) -> bool:
        term = self.get_glossary_term(db, term_id)
        if not term:
            return False

        db.delete(term)
        db.commit()
        logger.info(f"Glossary term deleted: {term_id}")
        return True


# Global instance
content_service = ContentService()
