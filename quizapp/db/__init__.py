from quizapp.db.connection import engine, get_session, init_db, make_engine, session_factory
from quizapp.db.models import Question, Quiz, QuizResult, User
from quizapp.db.repositories.quiz import quiz_repo
from quizapp.db.repositories.quiz_result import quiz_result_repo
from quizapp.db.repositories.user import user_repo

__all__ = [
    "engine",
    "get_session",
    "init_db",
    "make_engine",
    "session_factory",
    "Question",
    "Quiz",
    "QuizResult",
    "User",
    "quiz_repo",
    "quiz_result_repo",
    "user_repo",
]
