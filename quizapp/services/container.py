"""
서비스 묶음 생성. API/CLI는 여기서 만든 인스턴스를 쓰고, 테스트는 직접 조립해 넘긴다.
"""

from dataclasses import dataclass

import httpx

from quizapp.core.cache import TTLCache
from quizapp.core.config import settings
from quizapp.db.connection import SessionFactory, get_session
from quizapp.services.dictionary import DictionaryClient
from quizapp.services.http import make_http_client
from quizapp.services.image import ImageService
from quizapp.services.quiz_builder import QuizBuilderService
from quizapp.services.quiz_service import QuizService
from quizapp.services.scoring import ScoringService
from quizapp.services.trivia import TriviaClient
from quizapp.services.users import UserService
from quizapp.services.wiki import WikiClient


@dataclass
class Services:
    builder: QuizBuilderService
    quizzes: QuizService
    scoring: ScoringService
    users: UserService
    dictionary: DictionaryClient


def build_services(
    session_factory: SessionFactory = get_session,
    http_client: httpx.Client | None = None,
) -> Services:
    client = http_client or make_http_client()
    builder = QuizBuilderService(
        trivia=TriviaClient(client),
        wiki=WikiClient(client),
        images=ImageService(cache=TTLCache(settings.IMAGE_CACHE_TTL_SECONDS), client=client),
    )
    return Services(
        builder=builder,
        quizzes=QuizService(builder=builder, session_factory=session_factory),
        scoring=ScoringService(session_factory=session_factory),
        users=UserService(session_factory=session_factory),
        dictionary=DictionaryClient(client),
    )
