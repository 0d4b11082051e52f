"""
환경 변수 및 설정 로드.
"""

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "Trivia-Quiz"
    LOG_LEVEL: str = "INFO"

    # SQLite 기본, PostgreSQL도 가능 (postgres:// → psycopg 드라이버로 변환)
    DATABASE_URL: str = "sqlite:///quiz.db"
    SEED_TEST_USER: bool = True

    # 외부 API
    TRIVIA_API_URL: str = "https://opentdb.com/api.php"
    TRIVIA_CATEGORY_URL: str = "https://opentdb.com/api_category.php"
    WIKI_API_URL: str = "https://en.wikipedia.org/api/rest_v1/page/summary"
    DICTIONARY_API_URL: str = "https://api.dictionaryapi.dev/api/v2/entries/en"
    PLACEHOLDER_IMAGE_URL: str = "https://placehold.co/600x400/1a1a2e/ffffff/png"
    UNSPLASH_API_URL: str = "https://api.unsplash.com/photos/random"
    UNSPLASH_ACCESS_KEY: str | None = None
    REQUEST_TIMEOUT: float = 10

    # 퀴즈 생성
    MAX_QUESTIONS: int = 50
    IMAGE_CACHE_TTL_SECONDS: float = 24 * 60 * 60
    ENRICHMENT_POLICY: str = "degrade"  # degrade | strict

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
