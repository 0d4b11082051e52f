from quizapp.db.repositories.quiz import quiz_repo
from quizapp.db.repositories.quiz_result import quiz_result_repo
from quizapp.db.repositories.user import user_repo

__all__ = [
    "quiz_repo",
    "quiz_result_repo",
    "user_repo",
]
