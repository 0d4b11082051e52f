"""
외부 API 공용 httpx 클라이언트와 JSON 응답 처리.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from quizapp.core.config import settings
from quizapp.core.errors import SourceDataError, SourceUnavailable

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def make_http_client(timeout: float | None = None) -> httpx.Client:
    """모든 외부 호출에 타임아웃을 건다. 여러 스레드에서 공유해도 된다."""
    return httpx.Client(
        timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
        follow_redirects=True,
        headers={"User-Agent": f"{settings.PROJECT_NAME}/0.1"},
    )


def get_json(
    client: httpx.Client,
    url: str,
    *,
    source: str,
    params: dict[str, Any] | None = None,
) -> Any:
    """GET 후 JSON 파싱. 네트워크/상태 코드 오류는 SourceUnavailable, 파싱 오류는 SourceDataError."""
    try:
        resp = client.get(url, params=params)
    except httpx.HTTPError as e:
        raise SourceUnavailable(f"{source}: request failed: {e}") from e
    if resp.status_code != httpx.codes.OK:
        raise SourceUnavailable(
            f"{source}: API returned status {resp.status_code}", status_code=resp.status_code
        )
    try:
        return resp.json()
    except ValueError as e:
        raise SourceDataError(f"{source}: failed to decode response: {e}") from e


def parse_model(model: type[ModelT], data: Any, *, source: str) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise SourceDataError(f"{source}: unexpected response shape: {e}") from e
