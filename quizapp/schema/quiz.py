"""
퀴즈 조회·채점·랭킹 결과 레코드.
"""

import random

from pydantic import BaseModel, Field


class QuestionView(BaseModel):
    id: int
    text: str
    options: list[str]
    answer: str
    image_url: str | None = None
    context: str | None = None

    def shuffled_options(self, rng: random.Random | None = None) -> list[str]:
        """표시용 보기 순서. 매 조회마다 새로 섞고 저장하지 않는다."""
        opts = list(self.options)
        (rng or random).shuffle(opts)
        return opts


class QuizView(BaseModel):
    id: int
    title: str
    created_by: int | None = None
    questions: list[QuestionView] = Field(default_factory=list)


class QuizSummary(BaseModel):
    id: int
    title: str


class QuizStanding(BaseModel):
    """퀴즈 목록 + 해당 사용자의 점수/순위 (응시 안 했으면 0/0)."""

    id: int
    title: str
    user_score: float = 0
    rank: int = 0
    total_attempts: int = 0
    high_score: float = 0


class QuestionOutcome(BaseModel):
    text: str
    is_correct: bool
    user_answer: str
    correct_answer: str


class GradeResult(BaseModel):
    score: float
    correct_count: int
    total_count: int
    questions: list[QuestionOutcome]
    rank: int = 0


class LeaderboardEntry(BaseModel):
    rank: int
    username: str
    score: float
    quiz_name: str


class TopScore(BaseModel):
    rank: int
    username: str
    score: float


class UserView(BaseModel):
    id: int
    username: str
    email: str


class UserStats(BaseModel):
    quizzes_taken: int = 0
    average_score: float = 0
    global_rank: int = 0
