# app/survey/reader.py
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import PersistenceFailure
from app.models.response import Response

logger = logging.getLogger(__name__)


def get_responses(db: Session, user_id: int) -> List[Response]:
    """All stored answers of ``user_id`` (oldest row first), each with its question loaded."""
    try:
        return list(
            db.execute(
                select(Response)
                .where(Response.user_id == user_id)
                .order_by(Response.id)
            ).scalars().unique()
        )
    except SQLAlchemyError as exc:
        logger.error("failed to load responses for user_id=%s", user_id, exc_info=True)
        raise PersistenceFailure(str(exc), public_message="Failed to fetch responses.") from exc
