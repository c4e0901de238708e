"""
Pydantic schemas for chapter-related requests and responses
"""
from pydantic import Field
from typing import Optional
from datetime import datetime

from app.schemas.common import CamelModel


class ChapterCreate(CamelModel):
    """Schema for creating a chapter"""
    number: int = Field(..., ge=1, description="Position of the chapter in the book")
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    summary: Optional[str] = None
    reading_time: int = Field(10, ge=1, description="Estimated reading time in minutes")
    image_url: Optional[str] = None
    is_locked: bool = False


class ChapterUpdate(CamelModel):
    """Partial chapter update; only fields sent are changed"""
    number: Optional[int] = Field(None, ge=1)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    summary: Optional[str] = None
    reading_time: Optional[int] = Field(None, ge=1)
    image_url: Optional[str] = None
    is_locked: Optional[bool] = None


class ChapterResponse(CamelModel):
    id: int
    number: int
    title: str
    content: str
    summary: Optional[str] = None
    reading_time: Optional[int] = None
    image_url: Optional[str] = None
    is_locked: bool = False
    created_at: Optional[datetime] = None


class ProgressUpdate(CamelModel):
    """Schema for updating chapter progress"""
    progress_percentage: int = Field(..., ge=0, le=100)
    is_completed: Optional[bool] = None
    completed_at: Optional[datetime] = None


class ProgressResponse(CamelModel):
    id: int
    user_id: str
    chapter_id: int
    progress_percentage: int
    is_completed: bool
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
