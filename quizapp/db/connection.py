"""
SQLModel 엔진·세션 (기본 SQLite, PostgreSQL 가능).
"""

import logging
import threading
from contextlib import contextmanager
from typing import Callable, ContextManager, Generator

from sqlalchemy.engine import Engine
from sqlalchemy import func
from sqlmodel import Session, SQLModel, create_engine, select

from quizapp.core.config import settings
from quizapp.db.models import (  # noqa: F401 - 테이블 등록
    Question,
    Quiz,
    QuizResult,
    User,
)

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]


def normalize_db_url(db_url: str) -> str:
    # postgres:// 또는 postgresql:// → postgresql+psycopg:// (psycopg3 드라이버)
    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql://", 1)
    if db_url.startswith("postgresql://"):
        db_url = db_url.replace("postgresql://", "postgresql+psycopg://", 1)
    return db_url


def make_engine(db_url: str) -> Engine:
    db_url = normalize_db_url(db_url)
    connect_args = {}
    if db_url.startswith("sqlite"):
        # uvicorn 스레드풀과 보강용 스레드에서 같은 엔진을 쓴다
        connect_args["check_same_thread"] = False
    return create_engine(db_url, echo=False, connect_args=connect_args)


def init_db(bind: Engine, seed_test_user: bool = False) -> None:
    """테이블 생성. 비어 있는 DB면 test 사용자를 하나 넣는다."""
    SQLModel.metadata.create_all(bind)
    if not seed_test_user:
        return
    with Session(bind) as session:
        count = session.exec(select(func.count()).select_from(User)).one()
        if count == 0:
            session.add(User(username="test", email="test@example.com", password="test123"))
            session.commit()
            logger.info("빈 DB → test 사용자 생성")


def session_factory(bind: Engine) -> SessionFactory:
    """주어진 엔진에 묶인 get_session 대용 (테스트, CLI 등)."""

    @contextmanager
    def _session() -> Generator[Session, None, None]:
        with Session(bind) as session:
            yield session

    return _session


engine = make_engine(settings.DATABASE_URL)
_initialized = False
_init_lock = threading.Lock()


def _ensure_initialized() -> None:
    global _initialized
    if _initialized:
        return
    with _init_lock:
        if not _initialized:
            init_db(engine, seed_test_user=settings.SEED_TEST_USER)
            _initialized = True


@contextmanager
def get_session() -> Generator[Session, None, None]:
    # 첫 호출 시 테이블 생성 (DB 연결은 여기서 발생)
    _ensure_initialized()
    with Session(engine) as session:
        yield session
