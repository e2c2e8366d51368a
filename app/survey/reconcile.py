"""Write paths for a user's answers.

Both operations take the caller's Session and run entirely inside one
SERIALIZABLE transaction on it, so the existence check and the writes of an
upsert can never straddle two transactions.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from sqlalchemy import delete, insert, select, update
from sqlalchemy.orm import Session

from app.db.session import serializable_transaction
from app.models.response import Response

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplaceResult:
    saved_count: int


@dataclass(frozen=True)
class UpsertResult:
    updated_rows_affected: int
    created_count: int
    intended_updates: int
    intended_creates: int


def _rows(user_id: int, answers: Mapping[int, str]) -> list[dict]:
    return [
        {"user_id": user_id, "question_id": qid, "answer": answer}
        for qid, answer in answers.items()
    ]


def replace_responses(db: Session, user_id: int, answers: Mapping[int, str]) -> ReplaceResult:
    """Make the user's stored answers exactly ``answers``.

    Answers to questions missing from ``answers`` are deleted, not carried
    forward. An empty mapping therefore clears the user's set.
    """
    rows = _rows(user_id, answers)
    with serializable_transaction(db):
        db.execute(delete(Response).where(Response.user_id == user_id))
        if rows:
            db.execute(insert(Response), rows)
    logger.info("replaced responses user_id=%s saved=%d", user_id, len(rows))
    return ReplaceResult(saved_count=len(rows))


def upsert_responses(db: Session, user_id: int, answers: Mapping[int, str]) -> UpsertResult:
    """Merge ``answers`` into the user's stored answers.

    Existing (user, question) rows get their answer updated, the rest are
    inserted; questions absent from ``answers`` are untouched. The result
    carries both the planned split and what the store actually did, so a
    caller can see an update that matched no row.
    """
    question_ids = list(answers)
    updated = 0
    to_update: list[int] = []
    to_create: list[int] = []

    with serializable_transaction(db, public_message="Failed to upsert responses."):
        if question_ids:
            existing = set(
                db.execute(
                    select(Response.question_id).where(
                        Response.user_id == user_id,
                        Response.question_id.in_(question_ids),
                    )
                ).scalars()
            )
        else:
            existing = set()

        for qid in question_ids:
            (to_update if qid in existing else to_create).append(qid)

        for qid in to_update:
            result = db.execute(
                update(Response)
                .where(Response.user_id == user_id, Response.question_id == qid)
                .values(answer=answers[qid])
                .execution_options(synchronize_session=False)
            )
            updated += result.rowcount

        if to_create:
            db.execute(insert(Response), _rows(user_id, {qid: answers[qid] for qid in to_create}))

    result = UpsertResult(
        updated_rows_affected=updated,
        created_count=len(to_create),
        intended_updates=len(to_update),
        intended_creates=len(to_create),
    )
    if result.updated_rows_affected != result.intended_updates:
        logger.warning(
            "upsert user_id=%s intended %d updates but %d rows affected",
            user_id, result.intended_updates, result.updated_rows_affected,
        )
    logger.info(
        "upserted responses user_id=%s updated=%d created=%d",
        user_id, result.updated_rows_affected, result.created_count,
    )
    return result
