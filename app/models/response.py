from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, DateTime, ForeignKey, Index, Text, func
from app.db.base import Base

class Response(Base):
    __tablename__ = "responses"
    # Lookup index only: one row per (user, question) is kept by the
    # reconcilers, not by a unique constraint.
    __table_args__ = (Index("ix_responses_user_question", "user_id", "question_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False
    )
    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id"),
        nullable=False
    )
    answer: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="responses")
    question = relationship("Question", lazy="joined")
