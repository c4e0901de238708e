"""
Pydantic schemas for glossary terms
"""
from pydantic import Field
from typing import Optional
from datetime import datetime

from app.schemas.common import CamelModel


class GlossaryTermCreate(CamelModel):
    term: str = Field(..., min_length=1, max_length=255)
    definition: str = Field(..., min_length=1)
    category: Optional[str] = Field(None, max_length=100)
    example: Optional[str] = None
    chapter_ref: Optional[int] = Field(None, ge=1)


class GlossaryTermUpdate(CamelModel):
    term: Optional[str] = Field(None, min_length=1, max_length=255)
    definition: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, max_length=100)
    example: Optional[str] = None
    chapter_ref: Optional[int] = Field(None, ge=1)


class GlossaryTermResponse(CamelModel):
    id: int
    term: str
    definition: str
    category: Optional[str] = None
    example: Optional[str] = None
    chapter_ref: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
