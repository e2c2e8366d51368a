from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.schemas.question import QuestionOut


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ResponsesSubmit(BaseModel):
    # Left untyped on purpose: entry-level filtering happens in the normalizer,
    # and only a missing/empty/non-list payload is rejected.
    responses: Any = None


class ResponseOut(CamelModel):
    id: int
    user_id: int
    question_id: int
    answer: str
    created_at: datetime | None = None
    question: QuestionOut


class ReplaceOut(CamelModel):
    message: str
    saved_count: int


class UpsertOut(CamelModel):
    message: str
    updated_rows_affected: int
    created_count: int
    intended_updates: int
    intended_creates: int
