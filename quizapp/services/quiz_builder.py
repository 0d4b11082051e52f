"""
퀴즈 생성 파이프라인: 트리비아 문항 조회 → 텍스트 디코딩 → 문항별 병렬 보강(이미지, 위키 요약).

보강은 문항당 작업 1개를 한꺼번에 띄우고 전부 끝날 때까지 기다린다.
요약 조회 실패 처리는 EnrichmentPolicy로 정한다.
- degrade(기본): 해당 문항만 context 없이 진행
- strict: 하나라도 실패하면 배치 전체를 PartialEnrichmentError로 실패
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from quizapp.core.config import settings
from quizapp.core.errors import EnrichmentError, PartialEnrichmentError
from quizapp.schema.trivia import (
    EnrichmentOutcome,
    EnrichmentPolicy,
    QuestionDraft,
    TriviaCategory,
)
from quizapp.services.image import ImageService
from quizapp.services.trivia import TriviaClient
from quizapp.services.wiki import WikiClient

logger = logging.getLogger(__name__)

DIFFICULTIES = ("easy", "medium", "hard")


class QuizBuilderService:
    """트리비아 문항을 받아 보강된 QuestionDraft 리스트를 만든다 (저장은 하지 않음)."""

    def __init__(
        self,
        trivia: TriviaClient | None = None,
        wiki: WikiClient | None = None,
        images: ImageService | None = None,
        policy: EnrichmentPolicy | str | None = None,
        max_questions: int | None = None,
    ) -> None:
        self.trivia = trivia or TriviaClient()
        self.wiki = wiki or WikiClient()
        self.images = images or ImageService()
        self.policy = EnrichmentPolicy(policy or settings.ENRICHMENT_POLICY)
        self.max_questions = max_questions or settings.MAX_QUESTIONS

    def list_categories(self) -> list[TriviaCategory]:
        return self.trivia.fetch_categories()

    def build_quiz(
        self,
        category_id: int,
        difficulty: str | None,
        count: int,
        policy: EnrichmentPolicy | str | None = None,
    ) -> list[QuestionDraft]:
        """
        문항 count개를 조회해 보강한 결과를 API 반환 순서대로 돌려준다.
        policy를 주지 않으면 인스턴스 기본 정책을 따른다.
        """
        if not 1 <= count <= self.max_questions:
            raise ValueError(f"count must be between 1 and {self.max_questions}")
        if difficulty and difficulty.lower() not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {', '.join(DIFFICULTIES)}")
        policy = EnrichmentPolicy(policy) if policy else self.policy

        questions = self.trivia.fetch_questions(category_id, difficulty, count)
        logger.info("트리비아 문항 수신 %d건 → 보강 시작 (policy=%s)", len(questions), policy.value)

        outcomes = self.enrich_batch(questions)
        failures = [(i, o.error) for i, o in enumerate(outcomes) if o.error is not None]
        if failures:
            if policy is EnrichmentPolicy.STRICT:
                raise PartialEnrichmentError(failures)
            logger.warning("보강 실패 %d/%d건 → context 없이 진행", len(failures), len(outcomes))
        return [o.question for o in outcomes]

    def enrich_batch(self, questions: Sequence[QuestionDraft]) -> list[EnrichmentOutcome]:
        """문항별 (결과, 오류) 쌍을 입력 순서대로 반환. 실패 처리 여부는 호출 측이 정한다."""
        if not questions:
            return []
        with ThreadPoolExecutor(max_workers=len(questions)) as ex:
            futures = [ex.submit(self.enrich_one, q) for q in questions]
            return [f.result() for f in futures]

    def enrich_one(self, question: QuestionDraft) -> EnrichmentOutcome:
        image_url = self.images.image_for(question.category)
        try:
            context = self.wiki.fetch_summary(question.category).extract
        except EnrichmentError as e:
            logger.warning("위키 요약 조회 실패 category=%s err=%s", question.category, e)
            return EnrichmentOutcome(
                question=question.model_copy(update={"image_url": image_url, "context": ""}),
                error=e,
            )
        return EnrichmentOutcome(
            question=question.model_copy(update={"image_url": image_url, "context": context}),
        )
