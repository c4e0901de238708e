"""
ChapterProgress model - tracks reading progress per user and chapter
"""
from sqlalchemy import Column, String, Integer, Boolean, TIMESTAMP, ForeignKey, UniqueConstraint
from app.database import Base
from app.utils.clock import utcnow


class ChapterProgress(Base):
    """
    User chapter progress table - one row per (user, chapter), upserted
    """
    __tablename__ = "user_chapter_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "chapter_id", name="uix_user_chapter"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    chapter_id = Column(Integer, ForeignKey("chapters.id"), nullable=False)
    progress_percentage = Column(Integer, nullable=False, default=0)  # 0 to 100
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(TIMESTAMP)
    created_at = Column(TIMESTAMP, default=utcnow)

    def __repr__(self):
        return (
            f"<ChapterProgress(user_id={self.user_id}, chapter_id={self.chapter_id}, "
            f"pct={self.progress_percentage}, completed={self.is_completed})>"
        )
