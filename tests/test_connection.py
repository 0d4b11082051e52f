"""
DB 연결: URL 정규화, 첫 세션에서의 1회 초기화.
"""

import threading
import time

from sqlmodel import select

from quizapp.db import connection
from quizapp.db.models import User


def test_normalize_db_url():
    assert connection.normalize_db_url("postgres://u:p@h/db") == "postgresql+psycopg://u:p@h/db"
    assert connection.normalize_db_url("postgresql://u@h/db") == "postgresql+psycopg://u@h/db"
    assert connection.normalize_db_url("sqlite:///quiz.db") == "sqlite:///quiz.db"


def test_concurrent_first_sessions_initialize_once(tmp_path, monkeypatch):
    engine = connection.make_engine(f"sqlite:///{tmp_path / 'race.db'}")
    calls = []
    real_init_db = connection.init_db

    def slow_init_db(bind, seed_test_user=False):
        calls.append(threading.get_ident())
        time.sleep(0.05)
        real_init_db(bind, seed_test_user=seed_test_user)

    monkeypatch.setattr(connection, "engine", engine)
    monkeypatch.setattr(connection, "_initialized", False)
    monkeypatch.setattr(connection, "init_db", slow_init_db)
    monkeypatch.setattr(connection.settings, "SEED_TEST_USER", True)

    start = threading.Barrier(8, timeout=5)
    errors = []
    usernames = []

    def first_request() -> None:
        try:
            start.wait()
            with connection.get_session() as session:
                usernames.append([u.username for u in session.exec(select(User)).all()])
        except Exception as e:  # pragma: no cover
            errors.append(e)

    threads = [threading.Thread(target=first_request) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert not errors
    assert len(calls) == 1
    assert usernames == [["test"]] * 8
    engine.dispose()
