"""
퀴즈 생성·조회 오케스트레이션 (파이프라인 결과를 DB에 저장).
"""

import logging
from typing import Sequence

from quizapp.core.errors import NotFound
from quizapp.db.connection import SessionFactory, get_session
from quizapp.db.repositories.quiz import quiz_repo
from quizapp.db.repositories.user import user_repo
from quizapp.schema.quiz import QuizStanding, QuizSummary, QuizView
from quizapp.schema.trivia import EnrichmentPolicy, QuestionDraft
from quizapp.services.quiz_builder import QuizBuilderService

logger = logging.getLogger(__name__)


class QuizService:
    def __init__(
        self,
        builder: QuizBuilderService | None = None,
        session_factory: SessionFactory = get_session,
    ) -> None:
        self.builder = builder or QuizBuilderService()
        self._session = session_factory

    def create_quiz(
        self,
        title: str,
        creator_id: int,
        category_id: int,
        difficulty: str | None,
        count: int,
        policy: EnrichmentPolicy | str | None = None,
    ) -> tuple[int, list[QuestionDraft]]:
        """문항을 조회·보강한 뒤 퀴즈로 저장. (quiz_id, 저장된 문항 초안) 반환."""
        title = title.strip()
        if not title:
            raise ValueError("title required")
        with self._session() as session:
            if user_repo.get_by_id(session, creator_id) is None:
                raise NotFound(f"user {creator_id} not found")
        questions = self.builder.build_quiz(category_id, difficulty, count, policy=policy)
        quiz_id = self.save_quiz(title, creator_id, questions)
        return quiz_id, questions

    def save_quiz(self, title: str, creator_id: int | None, questions: Sequence[QuestionDraft]) -> int:
        with self._session() as session:
            return quiz_repo.create_quiz(session, title, creator_id, questions)

    def get_quiz(self, quiz_id: int) -> QuizView:
        with self._session() as session:
            return quiz_repo.get_quiz(session, quiz_id)

    def list_with_user_standing(self, user_id: int) -> list[QuizStanding]:
        with self._session() as session:
            return quiz_repo.list_with_user_standing(session, user_id)

    def list_created_by(self, user_id: int) -> list[QuizSummary]:
        with self._session() as session:
            logger.info("사용자가 만든 퀴즈 조회 user_id=%s", user_id)
            return quiz_repo.list_created_by(session, user_id)
