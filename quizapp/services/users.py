"""
사용자 가입/로그인과 통계·리더보드 조회.
비밀번호는 받은 그대로 비교한다 (해싱 없음).
"""

import logging

from quizapp.core.errors import InvalidCredentials, NotFound
from quizapp.db.connection import SessionFactory, get_session
from quizapp.db.repositories.quiz_result import quiz_result_repo
from quizapp.db.repositories.user import user_repo
from quizapp.schema.quiz import LeaderboardEntry, TopScore, UserStats, UserView

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session_factory: SessionFactory = get_session) -> None:
        self._session = session_factory

    def register(self, username: str, email: str, password: str) -> UserView:
        username, email = username.strip(), email.strip()
        if not username or not email or not password:
            raise ValueError("all fields are required")
        with self._session() as session:
            user = user_repo.create(session, username=username, email=email, password=password)
            logger.info("신규 사용자 가입 username=%s", username)
            return UserView(id=user.id, username=user.username, email=user.email)

    def authenticate(self, username: str, password: str) -> UserView:
        with self._session() as session:
            user = user_repo.get_by_username(session, username)
            if user is None or user.password != password:
                logger.info("로그인 실패 username=%s", username)
                raise InvalidCredentials("invalid credentials")
            return UserView(id=user.id, username=user.username, email=user.email)

    def get_user(self, user_id: int) -> UserView:
        with self._session() as session:
            user = user_repo.get_by_id(session, user_id)
            if user is None:
                raise NotFound(f"user {user_id} not found")
            return UserView(id=user.id, username=user.username, email=user.email)

    def stats(self, user_id: int) -> UserStats:
        with self._session() as session:
            return quiz_result_repo.user_stats(session, user_id)

    def top_scores(self, limit: int = 5) -> list[TopScore]:
        with self._session() as session:
            return quiz_result_repo.top_scores(session, limit)

    def leaderboard(self, limit: int = 50) -> list[LeaderboardEntry]:
        with self._session() as session:
            return quiz_result_repo.leaderboard(session, limit)
