"""
GlossaryTerm model - difficult words and their definitions
"""
from sqlalchemy import Column, String, Integer, Text, TIMESTAMP
from app.database import Base
from app.utils.clock import utcnow


class GlossaryTerm(Base):
    __tablename__ = "glossary_terms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    term = Column(String(255), nullable=False, index=True)
    definition = Column(Text, nullable=False)
    category = Column(String(100), index=True)  # personaggi, luoghi, oggetti
    example = Column(Text)
    chapter_ref = Column(Integer)  # chapter number the term appears in
    created_at = Column(TIMESTAMP, default=utcnow)
    updated_at = Column(TIMESTAMP, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<GlossaryTerm(id={self.id}, term={self.term})>"
