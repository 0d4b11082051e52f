"""
외부 API(트리비아, 위키, 사전, Unsplash) 응답 스키마와 보강된 문항 초안.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

# questions.options 구분자. 정답이 항상 첫 번째로 저장된다.
OPTION_DELIMITER = "|"


class TriviaCategory(BaseModel):
    id: int
    name: str


class CategoryResponse(BaseModel):
    trivia_categories: list[TriviaCategory]


class TriviaQuestion(BaseModel):
    """트리비아 API 문항 원본 (디코딩 전)."""

    category: str
    type: str = "multiple"
    difficulty: str = ""
    question: str
    correct_answer: str
    incorrect_answers: list[str] = Field(default_factory=list)


class TriviaResponse(BaseModel):
    response_code: int
    results: list[TriviaQuestion] = Field(default_factory=list)


class WikiSummary(BaseModel):
    extract: str = ""


class DictionaryDefinition(BaseModel):
    definition: str
    example: str | None = None


class DictionaryMeaning(BaseModel):
    partOfSpeech: str = ""
    definitions: list[DictionaryDefinition] = Field(default_factory=list)


class DictionaryEntry(BaseModel):
    word: str
    phonetic: str | None = None
    meanings: list[DictionaryMeaning] = Field(default_factory=list)


class UnsplashUrls(BaseModel):
    regular: str
    thumb: str | None = None


class UnsplashLinks(BaseModel):
    html: str | None = None


class UnsplashPhoto(BaseModel):
    urls: UnsplashUrls
    links: UnsplashLinks = Field(default_factory=UnsplashLinks)


class QuestionDraft(BaseModel):
    """디코딩·보강까지 끝난 문항. 퀴즈 저장 시 questions 행이 된다."""

    category: str
    difficulty: str = ""
    text: str
    correct_answer: str
    incorrect_answers: list[str] = Field(default_factory=list)
    image_url: str | None = None
    context: str | None = None

    def options(self) -> list[str]:
        """정답을 첫 번째로, 정답과 같은 오답·중복은 제외. 구분자는 '/'로 치환."""
        answer = self.stored_answer()
        out = [answer]
        for item in self.incorrect_answers:
            item = item.replace(OPTION_DELIMITER, "/")
            if item not in out:
                out.append(item)
        return out

    def stored_answer(self) -> str:
        return self.correct_answer.replace(OPTION_DELIMITER, "/")


class EnrichmentPolicy(str, Enum):
    """보강 실패 처리: degrade=해당 문항만 context 비움, strict=배치 전체 실패."""

    DEGRADE = "degrade"
    STRICT = "strict"


@dataclass
class EnrichmentOutcome:
    question: QuestionDraft
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
