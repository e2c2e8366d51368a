# app/survey/normalizer.py
from collections.abc import Mapping
from typing import Any

from app.core.errors import InvalidSubmission


def _question_id(entry: Mapping) -> int | None:
    qid = entry.get("questionId")
    # bool is an int subclass but never a question id
    if isinstance(qid, bool):
        return None
    if isinstance(qid, int):
        return qid
    if isinstance(qid, float) and qid.is_integer():
        return int(qid)
    return None


def _answer(entry: Mapping) -> str | None:
    value = entry.get("answer")
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def check_submission(raw: Any) -> list:
    """Whole-payload check: a non-empty list, or InvalidSubmission."""
    if not isinstance(raw, list) or not raw:
        raise InvalidSubmission("responses must be a non-empty array")
    return raw


def normalize_submission(raw: Any) -> dict[int, str]:
    """Collapse a raw submission into {question_id: answer}.

    Later entries for the same question overwrite earlier ones. Malformed
    entries (not an object, missing/non-integer questionId, non-scalar
    answer) are skipped; a missing or null answer becomes "".
    """
    latest: dict[int, str] = {}
    for entry in check_submission(raw):
        if not isinstance(entry, Mapping):
            continue
        qid = _question_id(entry)
        if qid is None:
            continue
        answer = _answer(entry)
        if answer is None:
            continue
        latest[qid] = answer
    return latest
