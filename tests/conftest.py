"""
공통 픽스처: 인메모리 SQLite, 외부 API 스텁(httpx.MockTransport), 서비스 조립.
"""

from typing import Callable

import httpx
import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from quizapp.core.cache import TTLCache
from quizapp.db.connection import init_db, session_factory
from quizapp.db.models import User
from quizapp.schema.trivia import QuestionDraft
from quizapp.services.container import Services
from quizapp.services.dictionary import DictionaryClient
from quizapp.services.image import ImageService
from quizapp.services.quiz_builder import QuizBuilderService
from quizapp.services.quiz_service import QuizService
from quizapp.services.scoring import ScoringService
from quizapp.services.trivia import TriviaClient
from quizapp.services.users import UserService
from quizapp.services.wiki import WikiClient

TRIVIA_URL = "https://trivia.test/api.php"
CATEGORY_URL = "https://trivia.test/api_category.php"
WIKI_URL = "https://wiki.test/summary"
DICTIONARY_URL = "https://dict.test/entries/en"
PLACEHOLDER_URL = "https://img.test/600x400"


def trivia_item(n: int, category: str = "General Knowledge") -> dict:
    return {
        "category": category,
        "type": "multiple",
        "difficulty": "easy",
        "question": f"Question {n}?",
        "correct_answer": f"Right {n}",
        "incorrect_answers": [f"Wrong {n}a", f"Wrong {n}b", f"Wrong {n}c"],
    }


class StubUpstream:
    """트리비아·위키·사전 API 스텁. 테스트에서 응답을 바꿔 끼운다."""

    def __init__(self) -> None:
        self.trivia_payload: dict = {
            "response_code": 0,
            "results": [trivia_item(n) for n in range(1, 4)],
        }
        self.trivia_status = 200
        self.categories = [{"id": 9, "name": "General Knowledge"}, {"id": 17, "name": "Science & Nature"}]
        self.failing_topics: set[str] = set()
        self.on_wiki: Callable[[str], None] | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host, path = request.url.host, request.url.path
        if host == "trivia.test" and path == "/api.php":
            return httpx.Response(self.trivia_status, json=self.trivia_payload)
        if host == "trivia.test" and path == "/api_category.php":
            return httpx.Response(200, json={"trivia_categories": self.categories})
        if host == "wiki.test" and path.startswith("/summary/"):
            topic = path[len("/summary/"):]
            if self.on_wiki is not None:
                self.on_wiki(topic)
            if topic in self.failing_topics:
                return httpx.Response(404, json={"title": "Not found."})
            return httpx.Response(200, json={"extract": f"About {topic}."})
        if host == "dict.test" and path.startswith("/entries/en/"):
            word = path[len("/entries/en/"):]
            if word != "quiz":
                return httpx.Response(404, json={"title": "No Definitions Found"})
            return httpx.Response(
                200,
                json=[
                    {
                        "word": "quiz",
                        "phonetic": "/kwɪz/",
                        "meanings": [
                            {
                                "partOfSpeech": "noun",
                                "definitions": [{"definition": "A test of knowledge."}],
                            }
                        ],
                    }
                ],
            )
        return httpx.Response(404)

    def trivia_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "trivia.test" and r.url.path == "/api.php"]


@pytest.fixture
def upstream():
    return StubUpstream()


@pytest.fixture
def http_client(upstream):
    client = httpx.Client(transport=httpx.MockTransport(upstream.handler))
    yield client
    client.close()


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def sessions(engine):
    """get_session 대용 세션 팩토리."""
    return session_factory(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


def add_user(session: Session, username: str) -> User:
    user = User(username=username, email=f"{username}@example.com", password="pw")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def user(session):
    return add_user(session, "alice")


def draft(n: int, **kwargs) -> QuestionDraft:
    fields = {
        "category": "General Knowledge",
        "text": f"Question {n}?",
        "correct_answer": f"Right {n}",
        "incorrect_answers": [f"Wrong {n}a", f"Wrong {n}b", f"Wrong {n}c"],
    }
    fields.update(kwargs)
    return QuestionDraft(**fields)


@pytest.fixture
def builder(http_client):
    return QuizBuilderService(
        trivia=TriviaClient(http_client, api_url=TRIVIA_URL, category_url=CATEGORY_URL),
        wiki=WikiClient(http_client, api_url=WIKI_URL),
        images=ImageService(cache=TTLCache(60), unsplash_key="", placeholder_base=PLACEHOLDER_URL),
        policy="degrade",
    )


@pytest.fixture
def services(builder, sessions, http_client):
    return Services(
        builder=builder,
        quizzes=QuizService(builder=builder, session_factory=sessions),
        scoring=ScoringService(session_factory=sessions),
        users=UserService(session_factory=sessions),
        dictionary=DictionaryClient(http_client, api_url=DICTIONARY_URL),
    )
