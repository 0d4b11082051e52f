"""
문항 이미지: 카테고리명으로 결정되는 placeholder URL.
UNSPLASH_ACCESS_KEY가 있으면 Unsplash 랜덤 사진을 쓰고, 실패하면 placeholder로 대체.
결과는 카테고리별로 TTL 캐시에 저장 (캐시는 인스턴스 소유).
"""

import logging
from urllib.parse import quote_plus

import httpx

from quizapp.core.cache import TTLCache
from quizapp.core.config import settings
from quizapp.core.errors import EnrichmentError
from quizapp.schema.trivia import UnsplashPhoto
from quizapp.services.http import get_json, make_http_client, parse_model

logger = logging.getLogger(__name__)


def placeholder_url(category: str, base_url: str | None = None) -> str:
    base = base_url or settings.PLACEHOLDER_IMAGE_URL
    return f"{base}?text={quote_plus(category)}"


class ImageService:
    def __init__(
        self,
        cache: TTLCache[str] | None = None,
        client: httpx.Client | None = None,
        unsplash_key: str | None = None,
        placeholder_base: str | None = None,
    ) -> None:
        self.cache = cache if cache is not None else TTLCache(settings.IMAGE_CACHE_TTL_SECONDS)
        self._unsplash_key = unsplash_key if unsplash_key is not None else settings.UNSPLASH_ACCESS_KEY
        self._client = client or (make_http_client() if self._unsplash_key else None)
        self._placeholder_base = placeholder_base

    def image_for(self, category: str) -> str:
        cached = self.cache.get(category)
        if cached is not None:
            return cached
        url = None
        if self._unsplash_key:
            try:
                url = self._fetch_unsplash(category)
            except EnrichmentError as e:
                logger.warning("Unsplash 이미지 조회 실패 → placeholder 사용 category=%s err=%s", category, e)
        if url is None:
            url = placeholder_url(category, self._placeholder_base)
        self.cache.set(category, url)
        return url

    def _fetch_unsplash(self, category: str) -> str:
        data = get_json(
            self._client,
            settings.UNSPLASH_API_URL,
            source="unsplash",
            params={
                "query": category,
                "orientation": "landscape",
                "client_id": self._unsplash_key,
            },
        )
        photo = parse_model(UnsplashPhoto, data, source="unsplash")
        # Unsplash 이용 조건: 사진 출처 표기
        logger.info("Photo by Unsplash photographer - View at: %s", photo.links.html)
        return photo.urls.regular
