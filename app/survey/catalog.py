# app/survey/catalog.py
from typing import Dict, Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.question import Question


def list_questions(db: Session) -> List[Question]:
    return list(db.execute(select(Question).order_by(Question.id)).scalars())


def group_by_category(questions: Iterable[Question]) -> Dict[str, List[Question]]:
    grouped: Dict[str, List[Question]] = {}
    for q in questions:
        grouped.setdefault(q.category, []).append(q)
    return grouped
