"""
위키백과 요약 API: 카테고리명으로 짧은 배경 설명을 가져온다.
"""

from urllib.parse import quote

import httpx

from quizapp.core.config import settings
from quizapp.schema.trivia import WikiSummary
from quizapp.services.http import get_json, make_http_client, parse_model


class WikiClient:
    def __init__(self, client: httpx.Client | None = None, api_url: str | None = None) -> None:
        self._client = client or make_http_client()
        self._api_url = (api_url or settings.WIKI_API_URL).rstrip("/")

    def fetch_summary(self, topic: str) -> WikiSummary:
        url = f"{self._api_url}/{quote(topic, safe='')}"
        data = get_json(self._client, url, source="wiki")
        return parse_model(WikiSummary, data, source="wiki")
