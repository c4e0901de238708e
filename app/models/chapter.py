"""
Chapter model
"""
from sqlalchemy import Column, String, Integer, Boolean, Text, TIMESTAMP
from app.database import Base
from app.utils.clock import utcnow


class Chapter(Base):
    """
    Chapters table - the readable text, ordered by number

    is_locked is informational only; unlocking is decided by the client
    from completion of the previous chapter.
    """
    __tablename__ = "chapters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(Integer, unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    summary = Column(Text)
    reading_time = Column(Integer, default=10)  # minutes
    image_url = Column(String)
    is_locked = Column(Boolean, default=False)
    created_at = Column(TIMESTAMP, default=utcnow)

    def __repr__(self):
        return f"<Chapter(id={self.id}, number={self.number}, title={self.title})>"
