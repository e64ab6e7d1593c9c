"""Daily recipe suggestion routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_current_user
from domain.models import User, get_db_session
from domain.schemas.activity_schemas import SuggestionResponse
from services.suggestion_service import SuggestionService

router = APIRouter(prefix="/suggestions", tags=["Suggestions"])
logger = logging.getLogger("chefsire.api.suggestions")


@router.get("/today", response_model=List[SuggestionResponse])
def today(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    """Today's suggestions, generated on first request of the day"""
    return [SuggestionResponse.model_validate(s) for s in SuggestionService.today(db, user)]


@router.post("/generate", response_model=List[SuggestionResponse])
def generate(user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return [SuggestionResponse.model_validate(s) for s in SuggestionService.generate(db, user)]


@router.post("/{suggestion_id}/accept", response_model=SuggestionResponse)
def accept(suggestion_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return SuggestionResponse.model_validate(SuggestionService.accept(db, user, suggestion_id))


@router.post("/{suggestion_id}/dismiss", response_model=SuggestionResponse)
def dismiss(suggestion_id: UUID, user: User = Depends(get_current_user), db: Session = Depends(get_db_session)):
    return SuggestionResponse.model_validate(SuggestionService.dismiss(db, user, suggestion_id))
