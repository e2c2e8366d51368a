# app/api/question_routes.py
from typing import Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.question import QuestionOut
from app.survey.catalog import group_by_category, list_questions

router = APIRouter(prefix="/api/questions", tags=["Questions"])

@router.get("", response_model=Dict[str, List[QuestionOut]], summary="Questions grouped by category")
def get_questions(db: Session = Depends(get_db)):
    return group_by_category(list_questions(db))
