"""
Public glossary endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.schemas.glossary import GlossaryTermResponse
from app.services.content_service import content_service

router = APIRouter(prefix="/api/glossary", tags=["glossary"])


@router.get("", response_model=List[GlossaryTermResponse])
def list_terms(category: Optional[str] = None, db: Session = Depends(get_db)):
    """Glossary terms ordered alphabetically, optionally for one category"""
    return content_service.list_glossary_terms(db, category)


@router.get("/{term_id}", response_model=GlossaryTermResponse)
def get_term(term_id: int, db: Session = Depends(get_db)):
    term = content_service.get_glossary_term(db, term_id)
    if not term:
        raise HTTPException(status_code=404, detail="Term not found")
    return term
