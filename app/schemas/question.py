from pydantic import BaseModel, ConfigDict

from app.models.question import QuestionCategory, QuestionType

class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    type: QuestionType
    category: QuestionCategory
