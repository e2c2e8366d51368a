import enum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, Text
from app.db.base import Base


class QuestionType(str, enum.Enum):
    TEXT = "text"
    NUMBER = "number"


class QuestionCategory(str, enum.Enum):
    DEMOGRAPHIC = "demographic"
    HEALTH = "health"
    FINANCIAL = "financial"


class Question(Base):
    """A catalog question. Rows are written by the seeder and never changed afterwards."""
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str] = mapped_column(String(16), nullable=False)        # QuestionType value
    category: Mapped[str] = mapped_column(String(32), index=True, nullable=False)  # QuestionCategory value
