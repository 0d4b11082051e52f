"""
채점: 점수 계산, 최고 점수 유지, 경쟁 순위(1,1,3), 예외.
"""

import pytest

from conftest import add_user, draft
from quizapp.core.errors import EmptyQuiz, NotFound
from quizapp.db.repositories.quiz import quiz_repo
from quizapp.db.repositories.quiz_result import quiz_result_repo
from quizapp.services.scoring import ScoringService, score_of


@pytest.fixture
def scoring(sessions):
    return ScoringService(session_factory=sessions)


@pytest.fixture
def quiz_id(session, user):
    return quiz_repo.create_quiz(session, "Three", user.id, [draft(1), draft(2), draft(3)])


def test_all_correct_scores_100(scoring, quiz_id, user):
    result = scoring.grade_submission(quiz_id, user.id, ["Right 1", "Right 2", "Right 3"])
    assert result.score == 100.0
    assert (result.correct_count, result.total_count) == (3, 3)
    assert result.rank == 1
    assert all(o.is_correct for o in result.questions)


def test_partial_score(scoring, quiz_id, user):
    result = scoring.grade_submission(quiz_id, user.id, ["Right 1", "Wrong 2a", "Right 3"])
    assert result.score == pytest.approx(66.67, abs=0.01)
    assert [o.is_correct for o in result.questions] == [True, False, True]
    assert result.questions[1].user_answer == "Wrong 2a"
    assert result.questions[1].correct_answer == "Right 2"


def test_missing_answers_count_as_wrong(scoring, quiz_id, user):
    result = scoring.grade_submission(quiz_id, user.id, ["Right 1"])
    assert result.correct_count == 1
    assert result.total_count == 3
    assert [o.user_answer for o in result.questions] == ["Right 1", "", ""]


def test_extra_answers_are_ignored(scoring, quiz_id, user):
    result = scoring.grade_submission(quiz_id, user.id, ["Right 1", "Right 2", "Right 3", "Right 4"])
    assert result.score == 100.0
    assert result.total_count == 3


def test_match_is_exact(scoring, quiz_id, user):
    result = scoring.grade_submission(quiz_id, user.id, ["right 1", "Right 2 ", "Right 3"])
    assert [o.is_correct for o in result.questions] == [False, False, True]


def test_lower_retry_keeps_best_score(scoring, quiz_id, user, session):
    scoring.grade_submission(quiz_id, user.id, ["Right 1", "Right 2", "Right 3"])
    second = scoring.grade_submission(quiz_id, user.id, [])
    assert second.score == 0.0
    session.expire_all()
    assert quiz_result_repo.get(session, user.id, quiz_id).score == 100.0


def test_rank_ties_share_position(scoring, session, user):
    quiz_id = quiz_repo.create_quiz(
        session, "Ten", user.id, [draft(n) for n in range(10)]
    )
    bob = add_user(session, "bob")
    carol = add_user(session, "carol")
    nine = [f"Right {n}" for n in range(9)]
    eight = [f"Right {n}" for n in range(8)]

    assert scoring.grade_submission(quiz_id, user.id, nine).rank == 1
    assert scoring.grade_submission(quiz_id, bob.id, nine).rank == 1
    assert scoring.grade_submission(quiz_id, carol.id, eight).rank == 3


def test_score_is_bounded(scoring, quiz_id, user):
    for answers in ([], ["Right 1"], ["Right 1", "Right 2", "Right 3"]):
        result = scoring.grade_submission(quiz_id, user.id, answers)
        assert 0.0 <= result.score <= 100.0


def test_empty_quiz(scoring, session, user):
    empty_id = quiz_repo.create_quiz(session, "Empty", user.id, [])
    with pytest.raises(EmptyQuiz):
        scoring.grade_submission(empty_id, user.id, ["anything"])
    assert quiz_result_repo.get(session, user.id, empty_id) is None


def test_unknown_quiz_or_user(scoring, quiz_id, user):
    with pytest.raises(NotFound):
        scoring.grade_submission(9999, user.id, [])
    with pytest.raises(NotFound):
        scoring.grade_submission(quiz_id, 9999, [])


def test_score_of_rejects_zero_total():
    assert score_of(1, 4) == 25.0
    with pytest.raises(EmptyQuiz):
        score_of(0, 0)
