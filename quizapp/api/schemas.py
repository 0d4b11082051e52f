"""
API 요청/응답 스키마.
"""

from typing import Literal

from pydantic import BaseModel, Field

from quizapp.schema.quiz import QuestionOutcome, UserStats, UserView


# ----- 사용자 -----


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    username: str
    password: str


class UserProfileResponse(BaseModel):
    user: UserView
    stats: UserStats


# ----- 퀴즈 생성 -----


class QuizCreateRequest(BaseModel):
    """퀴즈 생성 요청 (트리비아 카테고리/난이도/문항 수)."""

    title: str = Field(..., min_length=1, description="퀴즈 제목")
    user_id: int = Field(..., description="만든 사용자 ID")
    category: int = Field(0, ge=0, description="트리비아 카테고리 ID (0이면 전체)")
    difficulty: Literal["easy", "medium", "hard"] | None = Field(None, description="난이도 (없으면 전체)")
    question_count: int = Field(10, ge=1, description="문항 수 (상한은 MAX_QUESTIONS 설정)")
    policy: Literal["degrade", "strict"] | None = Field(
        None, description="보강 실패 처리 정책 (없으면 서버 설정값)"
    )


class QuizCreateResponse(BaseModel):
    quiz_id: int
    question_count: int
    missing_context: int = Field(0, description="위키 요약을 못 붙인 문항 수")


# ----- 퀴즈 풀이 -----


class PlayQuestion(BaseModel):
    """풀이용 문항. 정답은 포함하지 않고 보기 순서는 매번 섞는다."""

    id: int
    text: str
    options: list[str]
    image_url: str | None = None
    context: str | None = None


class PlayQuizResponse(BaseModel):
    id: int
    title: str
    questions: list[PlayQuestion]


class SubmitRequest(BaseModel):
    user_id: int
    answers: list[str] = Field(default_factory=list, description="문항 순서대로의 답안")


class SubmitResponse(BaseModel):
    score: float
    correct_answers: int
    total_questions: int
    questions: list[QuestionOutcome]
    rank: int
