"""Functional tests for per-score advice reconciliation.

The first group drives `adjust_advice_size` against a mocked advice store and
asserts the exact persistence calls. The second group runs the SQLAlchemy
repository against the shared SQLite database and asserts the resulting rows.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from rubric.logic.advice_reconciler import adjust_advice_size, reconcile_question_advice
from rubric.logic.repository_advice import AdviceRepository
from rubric.models.orm import Criterion, QuestionAdvice, ReviewQuestionnaire, Scale, TextArea
from rubric.models.score_range import ScoreRange


QUESTION_ID = 101


@pytest.fixture
def store(mocker):
    store = mocker.Mock(spec=["delete_outside_range", "find_for_score", "delete_for_score"])
    store.find_for_score.return_value = []
    return store


@pytest.fixture
def question():
    return SimpleNamespace(id=QUESTION_ID, is_scored=True, question_advices=[])


def _scores(advices):
    return [a.score for a in advices]


# -----------------------------
# Persistence calls (mocked store)
# -----------------------------

def test_unscored_question_triggers_no_store_calls(store):
    unscored = SimpleNamespace(id=7, is_scored=False, question_advices=[])

    adjust_advice_size(ScoreRange(1, 3), unscored, store)

    assert store.method_calls == []
    assert unscored.question_advices == []


def test_unscored_model_subtype_is_skipped(store):
    adjust_advice_size(ScoreRange(1, 3), TextArea(id=8), store)

    assert store.method_calls == []


def test_object_without_capability_is_treated_as_unscored(store):
    adjust_advice_size(ScoreRange(1, 3), SimpleNamespace(id=9), store)

    assert store.method_calls == []


def test_out_of_range_delete_is_issued_once_and_first(store, question, mocker):
    adjust_advice_size(ScoreRange(1, 3), question, store)

    store.delete_outside_range.assert_called_once_with(QUESTION_ID, 1, 3)
    assert store.mock_calls[0] == mocker.call.delete_outside_range(QUESTION_ID, 1, 3)


def test_scores_are_queried_in_ascending_order(store, question, mocker):
    adjust_advice_size(ScoreRange(1, 3), question, store)

    assert store.find_for_score.call_args_list == [
        mocker.call(QUESTION_ID, 1),
        mocker.call(QUESTION_ID, 2),
        mocker.call(QUESTION_ID, 3),
    ]


def test_missing_advice_is_appended_for_every_score(store, question):
    adjust_advice_size(ScoreRange(1, 3), question, store)

    assert _scores(question.question_advices) == [1, 2, 3]
    assert all(isinstance(a, QuestionAdvice) for a in question.question_advices)
    assert {a.question_id for a in question.question_advices} == {QUESTION_ID}
    assert all(not a.advice for a in question.question_advices)
    store.delete_for_score.assert_not_called()


def test_complete_advice_set_is_left_alone(store, question):
    store.find_for_score.side_effect = lambda qid, score: [object()]

    adjust_advice_size(ScoreRange(1, 3), question, store)

    assert question.question_advices == []
    store.delete_for_score.assert_not_called()
    store.delete_outside_range.assert_called_once_with(QUESTION_ID, 1, 3)


def test_duplicated_scores_are_deleted_entirely(store, question, mocker):
    advice = object()
    store.find_for_score.side_effect = lambda qid, score: [advice, advice]

    adjust_advice_size(ScoreRange(1, 3), question, store)

    assert store.delete_for_score.call_args_list == [
        mocker.call(QUESTION_ID, 1),
        mocker.call(QUESTION_ID, 2),
        mocker.call(QUESTION_ID, 3),
    ]
    # No replacement in the same pass
    assert question.question_advices == []


def test_only_missing_scores_are_created(store, question):
    store.find_for_score.side_effect = lambda qid, score: [] if score == 2 else [object()]

    adjust_advice_size(ScoreRange(1, 3), question, store)

    assert _scores(question.question_advices) == [2]
    store.delete_for_score.assert_not_called()


@pytest.mark.parametrize(
    "bounds, scores, empty",
    [((1, 3), [1, 2, 3], False), ((2, 2), [2], False), ((3, 1), [], True)],
)
def test_score_range_is_inclusive_and_empty_when_inverted(bounds, scores, empty):
    score_range = ScoreRange(*bounds)

    assert list(score_range) == scores
    assert score_range.is_empty is empty


def test_empty_range_deletes_everything_and_skips_per_score_work(store, question):
    adjust_advice_size(ScoreRange(3, 1), question, store)

    store.delete_outside_range.assert_called_once_with(QUESTION_ID, 3, 1)
    store.find_for_score.assert_not_called()
    store.delete_for_score.assert_not_called()
    assert question.question_advices == []


def test_store_failures_propagate_unchanged(store, question):
    boom = RuntimeError("constraint violated")
    store.delete_outside_range.side_effect = boom

    with pytest.raises(RuntimeError) as excinfo:
        adjust_advice_size(ScoreRange(1, 3), question, store)

    assert excinfo.value is boom
    store.find_for_score.assert_not_called()


# -----------------------------
# Resulting rows (SQLite)
# -----------------------------

def _seed(db_session, scores, *, min_score=1, max_score=3, question_cls=Criterion):
    questionnaire = ReviewQuestionnaire(name="Peer review", min_question_score=min_score, max_question_score=max_score)
    question = question_cls(txt="Clarity of argument", weight=1, seq=1.0, questionnaire=questionnaire)
    question.question_advices = [QuestionAdvice(score=s, advice=f"advice {s}") for s in scores]
    db_session.add(questionnaire)
    db_session.commit()
    return questionnaire, question


def _stored(db_session, question):
    return AdviceRepository(db_session).list_for_question(question.id)


def test_reconciled_question_has_exactly_one_advice_per_score(db_session):
    questionnaire, question = _seed(db_session, [0, 1, 4, 7])

    adjust_advice_size(questionnaire.score_range, question, AdviceRepository(db_session))
    db_session.commit()

    rows = _stored(db_session, question)
    assert _scores(rows) == [1, 2, 3]
    assert rows[0].advice == "advice 1"
    assert rows[1].advice == "" and rows[2].advice == ""


def test_reconciliation_is_idempotent(db_session):
    questionnaire, question = _seed(db_session, [2, 5])
    repo = AdviceRepository(db_session)

    adjust_advice_size(questionnaire.score_range, question, repo)
    db_session.commit()
    first = [(a.id, a.score) for a in _stored(db_session, question)]

    adjust_advice_size(questionnaire.score_range, question, repo)
    db_session.commit()
    second = [(a.id, a.score) for a in _stored(db_session, question)]

    assert first == second
    assert [score for _, score in second] == [1, 2, 3]


def test_duplicate_collapse_needs_a_second_pass_to_converge(db_session):
    questionnaire, question = _seed(db_session, [1, 2, 2, 3])
    repo = AdviceRepository(db_session)

    adjust_advice_size(questionnaire.score_range, question, repo)
    db_session.commit()
    assert _scores(_stored(db_session, question)) == [1, 3]

    adjust_advice_size(questionnaire.score_range, question, repo)
    db_session.commit()
    rows = _stored(db_session, question)
    assert _scores(rows) == [1, 2, 3]
    assert [r.advice for r in rows] == ["advice 1", "", "advice 3"]


def test_empty_range_removes_all_stored_advice(db_session):
    questionnaire, question = _seed(db_session, [1, 2, 3], min_score=3, max_score=1)

    adjust_advice_size(questionnaire.score_range, question, AdviceRepository(db_session))
    db_session.commit()

    assert _stored(db_session, question) == []


def test_unscored_question_keeps_its_rows(db_session):
    questionnaire, question = _seed(db_session, [9], question_cls=TextArea)

    adjust_advice_size(questionnaire.score_range, question, AdviceRepository(db_session))
    db_session.commit()

    assert _scores(_stored(db_session, question)) == [9]


def test_reconcile_question_advice_loads_range_from_questionnaire(db_session):
    _, question = _seed(db_session, [], min_score=0, max_score=4, question_cls=Scale)

    rows = reconcile_question_advice(db_session, question.id)
    db_session.commit()

    assert _scores(rows) == [0, 1, 2, 3, 4]
    assert _scores(question.question_advices) == [0, 1, 2, 3, 4]


def test_reconcile_question_advice_rejects_unknown_question(db_session):
    from rubric.errors import QuestionNotFoundError

    with pytest.raises(QuestionNotFoundError):
        reconcile_question_advice(db_session, 424242)
