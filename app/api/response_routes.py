# app/api/response_routes.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.deps import get_current_user_id
from app.db.session import get_db
from app.schemas.response import ReplaceOut, ResponseOut, ResponsesSubmit, UpsertOut
from app.survey.normalizer import normalize_submission
from app.survey.reader import get_responses
from app.survey.reconcile import replace_responses, upsert_responses

router = APIRouter(prefix="/api/responses", tags=["Responses"])

@router.post("", response_model=ReplaceOut, status_code=201, summary="Replace the user's full answer set")
def submit_responses(
    payload: ResponsesSubmit,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    answers = normalize_submission(payload.responses)
    result = replace_responses(db, user_id, answers)
    return ReplaceOut(message="Responses saved (replaced previous set).", saved_count=result.saved_count)

@router.patch("", response_model=UpsertOut, summary="Merge answers into the user's stored set")
def upsert_my_responses(
    payload: ResponsesSubmit,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    answers = normalize_submission(payload.responses)
    result = upsert_responses(db, user_id, answers)
    return UpsertOut(
        message="Responses processed.",
        updated_rows_affected=result.updated_rows_affected,
        created_count=result.created_count,
        intended_updates=result.intended_updates,
        intended_creates=result.intended_creates,
    )

@router.get("", response_model=List[ResponseOut], summary="The user's stored answers with question details")
def get_my_responses(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return get_responses(db, user_id)
