from quizapp.services.container import Services, build_services
from quizapp.services.dictionary import DictionaryClient
from quizapp.services.image import ImageService
from quizapp.services.quiz_builder import QuizBuilderService
from quizapp.services.quiz_service import QuizService
from quizapp.services.scoring import ScoringService
from quizapp.services.trivia import TriviaClient
from quizapp.services.users import UserService
from quizapp.services.wiki import WikiClient

__all__ = [
    "Services",
    "build_services",
    "DictionaryClient",
    "ImageService",
    "QuizBuilderService",
    "QuizService",
    "ScoringService",
    "TriviaClient",
    "UserService",
    "WikiClient",
]
