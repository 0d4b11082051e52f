"""
트리비아 응답 텍스트 정리: base64 인코딩 감지·디코딩 후 HTML 엔티티 디코딩.

base64 여부는 문항 본문으로만 판단하고, 본문이 인코딩돼 있으면 같은 문항의 모든 필드를 디코딩한다.
"""

import base64
import binascii
import html

from quizapp.schema.trivia import QuestionDraft, TriviaQuestion


def _b64_text(value: str) -> str | None:
    """엄격한 base64로 디코딩되고 결과가 UTF-8이면 디코딩 결과, 아니면 None."""
    if not value or len(value) % 4 != 0:
        return None
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return None


def looks_base64(value: str) -> bool:
    """문항 본문 판정용. 디코딩 결과가 출력 가능한 문자열이어야 한다."""
    decoded = _b64_text(value)
    return decoded is not None and decoded.isprintable()


def clean_text(value: str, encoded: bool = False) -> str:
    if encoded:
        decoded = _b64_text(value)
        if decoded is not None:
            value = decoded
    return html.unescape(value)


def to_draft(raw: TriviaQuestion) -> QuestionDraft:
    """필드별로 디코딩한 문항 초안 (보강 필드는 비어 있음)."""
    encoded = looks_base64(raw.question)
    return QuestionDraft(
        category=clean_text(raw.category, encoded),
        difficulty=clean_text(raw.difficulty, encoded),
        text=clean_text(raw.question, encoded),
        correct_answer=clean_text(raw.correct_answer, encoded),
        incorrect_answers=[clean_text(a, encoded) for a in raw.incorrect_answers],
    )
