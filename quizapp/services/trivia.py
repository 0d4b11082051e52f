"""
트리비아 API(OpenTDB 호환) 클라이언트: 카테고리 목록, 문항 조회.
"""

import logging

import httpx

from quizapp.core.config import settings
from quizapp.core.errors import SourceDataError, SourceUnavailable
from quizapp.schema.trivia import (
    CategoryResponse,
    QuestionDraft,
    TriviaCategory,
    TriviaResponse,
)
from quizapp.services.http import get_json, make_http_client, parse_model
from quizapp.services.text_cleanup import to_draft

logger = logging.getLogger(__name__)


class TriviaClient:
    def __init__(
        self,
        client: httpx.Client | None = None,
        api_url: str | None = None,
        category_url: str | None = None,
    ) -> None:
        self._client = client or make_http_client()
        self._api_url = api_url or settings.TRIVIA_API_URL
        self._category_url = category_url or settings.TRIVIA_CATEGORY_URL

    def fetch_categories(self) -> list[TriviaCategory]:
        data = get_json(self._client, self._category_url, source="trivia categories")
        return parse_model(CategoryResponse, data, source="trivia categories").trivia_categories

    def fetch_questions(
        self,
        category_id: int,
        difficulty: str | None,
        amount: int,
    ) -> list[QuestionDraft]:
        """
        문항 amount개를 받아 텍스트를 디코딩한 초안 리스트로 반환 (API 반환 순서 유지).
        category_id <= 0 이면 카테고리 제한 없음, difficulty가 비면 난이도 제한 없음.
        """
        params: dict[str, str | int] = {"amount": amount}
        if category_id > 0:
            params["category"] = category_id
        if difficulty:
            params["difficulty"] = difficulty.lower()

        logger.info("트리비아 문항 조회 중 params=%s", params)
        data = get_json(self._client, self._api_url, source="trivia", params=params)
        result = parse_model(TriviaResponse, data, source="trivia")
        if result.response_code != 0:
            raise SourceUnavailable(f"trivia: API error: response code {result.response_code}")
        if not result.results:
            raise SourceDataError("trivia: API returned no questions")
        return [to_draft(raw) for raw in result.results]
