"""
사전 API: 단어 정의 조회.
"""

import logging
from urllib.parse import quote

import httpx

from quizapp.core.config import settings
from quizapp.core.errors import NotFound, SourceUnavailable
from quizapp.schema.trivia import DictionaryEntry
from quizapp.services.http import get_json, make_http_client, parse_model

logger = logging.getLogger(__name__)


class DictionaryClient:
    def __init__(self, client: httpx.Client | None = None, api_url: str | None = None) -> None:
        self._client = client or make_http_client()
        self._api_url = (api_url or settings.DICTIONARY_API_URL).rstrip("/")

    def fetch_definition(self, word: str) -> DictionaryEntry:
        """첫 번째 사전 항목을 반환. 정의가 없으면 NotFound."""
        word = word.strip()
        if not word:
            raise ValueError("word required")
        url = f"{self._api_url}/{quote(word, safe='')}"
        try:
            data = get_json(self._client, url, source="dictionary")
        except SourceUnavailable as e:
            # 사전 API는 없는 단어에 404를 준다
            if e.status_code == httpx.codes.NOT_FOUND:
                raise NotFound(f"no definitions found for {word!r}") from e
            raise
        if not isinstance(data, list) or not data:
            raise NotFound(f"no definitions found for {word!r}")
        return parse_model(DictionaryEntry, data[0], source="dictionary")
