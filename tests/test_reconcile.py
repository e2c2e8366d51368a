import pytest
from sqlalchemy import func, select

from app.core.errors import PersistenceFailure
from app.models.response import Response
from app.survey.normalizer import normalize_submission
from app.survey.reconcile import ReplaceResult, UpsertResult, replace_responses, upsert_responses

UNKNOWN_QUESTION = 999  # violates the responses.question_id foreign key


# ---------------------------------------------------------------------------
# replace
# ---------------------------------------------------------------------------

def test_replace_drops_questions_missing_from_new_set(db, user_id, stored, seed_answers):
    seed_answers(user_id, {1: "Yes", 2: "30"})

    result = replace_responses(db, user_id, {2: "31"})

    assert result == ReplaceResult(saved_count=1)
    assert stored(user_id) == {2: "31"}


@pytest.mark.parametrize(
    "prior",
    [{}, {1: "Yes"}, {1: "Yes", 2: "30", 5: "No", 14: "unsure"}],
)
def test_replace_result_is_independent_of_prior_set(db, user_id, stored, seed_answers, prior):
    seed_answers(user_id, prior)
    target = {2: "31", 3: "female", 12: "4000"}

    replace_responses(db, user_id, target)

    assert stored(user_id) == target


def test_replace_leaves_other_users_alone(db, user_id, other_user_id, stored, seed_answers):
    seed_answers(other_user_id, {1: "Bob", 2: "41"})

    replace_responses(db, user_id, {1: "Alice"})

    assert stored(other_user_id) == {1: "Bob", 2: "41"}


def test_replace_with_empty_set_clears_user(db, user_id, stored, seed_answers):
    seed_answers(user_id, {1: "Yes"})

    assert replace_responses(db, user_id, {}).saved_count == 0
    assert stored(user_id) == {}


def test_replace_is_all_or_nothing(db, user_id, stored, seed_answers):
    seed_answers(user_id, {1: "Yes", 2: "30"})

    with pytest.raises(PersistenceFailure):
        replace_responses(db, user_id, {2: "31", UNKNOWN_QUESTION: "boom"})

    # the delete ran before the failing insert; it must be rolled back too
    assert stored(user_id) == {1: "Yes", 2: "30"}


def test_session_is_reusable_after_failure(db, user_id, stored):
    with pytest.raises(PersistenceFailure):
        replace_responses(db, user_id, {UNKNOWN_QUESTION: "boom"})

    replace_responses(db, user_id, {1: "ok"})
    assert stored(user_id) == {1: "ok"}


# ---------------------------------------------------------------------------
# upsert
# ---------------------------------------------------------------------------

def test_upsert_merges_into_existing_set(db, user_id, stored, seed_answers):
    seed_answers(user_id, {1: "Yes", 2: "30"})

    result = upsert_responses(db, user_id, {2: "31", 3: "No"})

    assert result == UpsertResult(
        updated_rows_affected=1, created_count=1, intended_updates=1, intended_creates=1
    )
    assert stored(user_id) == {1: "Yes", 2: "31", 3: "No"}


def test_upsert_counts_against_prior_set(db, user_id, stored, seed_answers):
    prior = {1: "a", 2: "b", 3: "c"}
    target = {2: "B", 3: "C", 4: "D", 5: "E"}
    seed_answers(user_id, prior)

    result = upsert_responses(db, user_id, target)

    assert result.created_count == len(target.keys() - prior.keys())
    assert result.updated_rows_affected <= len(target.keys() & prior.keys())
    after = stored(user_id)
    for qid in prior.keys() - target.keys():
        assert after[qid] == prior[qid]
    for qid, answer in target.items():
        assert after[qid] == answer


def test_upsert_into_empty_set_creates_everything(db, user_id, stored):
    result = upsert_responses(db, user_id, normalize_submission([
        {"questionId": 1, "answer": "Dana"},
        {"questionId": 2, "answer": "52"},
    ]))

    assert (result.updated_rows_affected, result.created_count) == (0, 2)
    assert (result.intended_updates, result.intended_creates) == (0, 2)
    assert stored(user_id) == {1: "Dana", 2: "52"}


def test_upsert_with_empty_set_is_a_noop(db, user_id, stored, seed_answers):
    seed_answers(user_id, {1: "Yes"})

    assert upsert_responses(db, user_id, {}) == UpsertResult(0, 0, 0, 0)
    assert stored(user_id) == {1: "Yes"}


def test_upsert_does_not_touch_other_users(db, user_id, other_user_id, stored, seed_answers):
    seed_answers(other_user_id, {2: "41"})

    result = upsert_responses(db, user_id, {2: "31"})

    assert result.created_count == 1
    assert stored(other_user_id) == {2: "41"}


def test_upsert_reports_rows_affected_separately_from_intent(db, user_id, seed_answers):
    # two rows for one (user, question) pair, e.g. left behind by racing inserts
    seed_answers(user_id, {4: "90210"})
    seed_answers(user_id, {4: "10001"})

    result = upsert_responses(db, user_id, {4: "60601"})

    assert result.intended_updates == 1
    assert result.updated_rows_affected == 2
    answers = db.execute(
        select(Response.answer).where(Response.user_id == user_id, Response.question_id == 4)
    ).scalars().all()
    assert answers == ["60601", "60601"]


def test_upsert_is_all_or_nothing(db, user_id, stored, seed_answers):
    seed_answers(user_id, {1: "Yes", 2: "30"})

    with pytest.raises(PersistenceFailure):
        upsert_responses(db, user_id, {2: "31", UNKNOWN_QUESTION: "boom"})

    assert stored(user_id) == {1: "Yes", 2: "30"}
    count = db.execute(select(func.count()).select_from(Response)).scalar_one()
    assert count == 2
