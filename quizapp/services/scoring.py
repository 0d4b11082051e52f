"""
채점·순위: 제출 답안을 채점하고 최고 점수를 저장한 뒤 해당 퀴즈 내 순위를 계산한다.
"""

import logging
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError

from quizapp.core.errors import EmptyQuiz, NotFound, PersistenceError
from quizapp.db.connection import SessionFactory, get_session
from quizapp.db.models import Question
from quizapp.db.repositories.quiz import quiz_repo
from quizapp.db.repositories.quiz_result import quiz_result_repo
from quizapp.db.repositories.user import user_repo
from quizapp.schema.quiz import GradeResult, QuestionOutcome

logger = logging.getLogger(__name__)


def grade_answers(questions: Sequence[Question], answers: Sequence[str]) -> list[QuestionOutcome]:
    """
    문항(id 순)과 답안을 위치로 짝지어 채점.
    답안이 모자라면 빈 답(오답)으로 보고, 남는 답안은 무시한다.
    정답 판정은 대소문자·공백 포함 완전 일치.
    """
    outcomes = []
    for i, q in enumerate(questions):
        user_answer = answers[i] if i < len(answers) else ""
        outcomes.append(
            QuestionOutcome(
                text=q.text,
                is_correct=user_answer == q.answer,
                user_answer=user_answer,
                correct_answer=q.answer,
            )
        )
    return outcomes


def score_of(correct_count: int, total_count: int) -> float:
    if total_count == 0:
        raise EmptyQuiz("cannot grade a quiz with no questions")
    return correct_count / total_count * 100


class ScoringService:
    """quiz_results의 유일한 writer."""

    def __init__(self, session_factory: SessionFactory = get_session) -> None:
        self._session = session_factory

    def grade_submission(self, quiz_id: int, user_id: int, answers: Sequence[str]) -> GradeResult:
        with self._session() as session:
            if quiz_repo.get(session, quiz_id) is None:
                raise NotFound(f"quiz {quiz_id} not found")
            if user_repo.get_by_id(session, user_id) is None:
                raise NotFound(f"user {user_id} not found")

            questions = quiz_repo.get_questions(session, quiz_id)
            outcomes = grade_answers(questions, answers)
            correct = sum(1 for o in outcomes if o.is_correct)
            score = score_of(correct, len(outcomes))

            logger.info("점수 저장 user_id=%s quiz_id=%s score=%.2f", user_id, quiz_id, score)
            try:
                quiz_result_repo.upsert_best(session, user_id, quiz_id, score)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.exception("점수 저장 실패 user_id=%s quiz_id=%s", user_id, quiz_id)
                raise PersistenceError(f"failed to save score: {e}") from e

            rank = quiz_result_repo.get_rank(session, quiz_id, user_id)

        return GradeResult(
            score=score,
            correct_count=correct,
            total_count=len(outcomes),
            questions=outcomes,
            rank=rank,
        )
