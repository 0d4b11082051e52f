"""
FastAPI 앱: 사용자, 퀴즈 생성·풀이·채점, 리더보드, 사전 조회 API.
"""

import logging

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from quizapp.api.schemas import (
    LoginRequest,
    PlayQuestion,
    PlayQuizResponse,
    QuizCreateRequest,
    QuizCreateResponse,
    RegisterRequest,
    SubmitRequest,
    SubmitResponse,
    UserProfileResponse,
)
from quizapp.core.config import settings
from quizapp.core.errors import (
    DuplicateUser,
    EmptyQuiz,
    EnrichmentError,
    InvalidCredentials,
    NotFound,
    PersistenceError,
    QuizAppError,
)
from quizapp.schema.quiz import LeaderboardEntry, QuizStanding, QuizSummary, TopScore, UserView
from quizapp.schema.trivia import DictionaryEntry, TriviaCategory
from quizapp.services.container import Services, build_services

logger = logging.getLogger(__name__)

# 구체적인 예외가 먼저 매칭되도록 순서 유지
_STATUS_BY_ERROR: list[tuple[type[QuizAppError], int]] = [
    (NotFound, 404),
    (EmptyQuiz, 422),
    (DuplicateUser, 409),
    (InvalidCredentials, 401),
    (EnrichmentError, 502),
    (PersistenceError, 500),
]


def status_for(error: QuizAppError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(error, cls):
            return status
    return 500


def create_app(services: Services | None = None) -> FastAPI:
    app = FastAPI(
        title="Trivia Quiz API",
        description="트리비아 퀴즈 생성(외부 문항 + 위키 보강), 채점, 순위",
        version="0.1.0",
    )
    svc = services or build_services()

    @app.exception_handler(QuizAppError)
    async def quiz_app_error_handler(request: Request, exc: QuizAppError) -> JSONResponse:
        status = status_for(exc)
        if status >= 500:
            logger.error("%s %s 실패: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status, content={"detail": str(exc)})

    # ----- 사용자 -----

    @app.post("/users/register", response_model=UserView, status_code=201, summary="회원 가입")
    def register(body: RegisterRequest) -> UserView:
        try:
            return svc.users.register(body.username, body.email, body.password)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app.post("/users/login", response_model=UserView, summary="로그인 (사용자 확인)")
    def login(body: LoginRequest) -> UserView:
        return svc.users.authenticate(body.username, body.password)

    @app.get("/users/{user_id:int}", response_model=UserProfileResponse, summary="사용자 정보·통계")
    def user_profile(user_id: int) -> UserProfileResponse:
        user = svc.users.get_user(user_id)
        return UserProfileResponse(user=user, stats=svc.users.stats(user_id))

    @app.get(
        "/users/{user_id:int}/quizzes",
        response_model=list[QuizStanding],
        summary="전체 퀴즈 + 사용자 점수/순위",
    )
    def user_quizzes(user_id: int) -> list[QuizStanding]:
        svc.users.get_user(user_id)
        return svc.quizzes.list_with_user_standing(user_id)

    @app.get(
        "/users/{user_id:int}/created-quizzes",
        response_model=list[QuizSummary],
        summary="사용자가 만든 퀴즈",
    )
    def created_quizzes(user_id: int) -> list[QuizSummary]:
        svc.users.get_user(user_id)
        return svc.quizzes.list_created_by(user_id)

    # ----- 퀴즈 -----

    @app.get("/categories", response_model=list[TriviaCategory], summary="트리비아 카테고리 목록")
    def categories() -> list[TriviaCategory]:
        return svc.builder.list_categories()

    @app.post(
        "/quizzes",
        response_model=QuizCreateResponse,
        status_code=201,
        summary="퀴즈 생성",
        description="트리비아 API에서 문항을 받아 이미지·위키 요약을 병렬로 붙인 뒤 저장.",
    )
    def create_quiz(body: QuizCreateRequest) -> QuizCreateResponse:
        try:
            quiz_id, questions = svc.quizzes.create_quiz(
                title=body.title,
                creator_id=body.user_id,
                category_id=body.category,
                difficulty=body.difficulty,
                count=body.question_count,
                policy=body.policy,
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return QuizCreateResponse(
            quiz_id=quiz_id,
            question_count=len(questions),
            missing_context=sum(1 for q in questions if not q.context),
        )

    @app.get("/quizzes/{quiz_id:int}", response_model=PlayQuizResponse, summary="퀴즈 풀이용 조회")
    def get_quiz(quiz_id: int) -> PlayQuizResponse:
        quiz = svc.quizzes.get_quiz(quiz_id)
        return PlayQuizResponse(
            id=quiz.id,
            title=quiz.title,
            questions=[
                PlayQuestion(
                    id=q.id,
                    text=q.text,
                    options=q.shuffled_options(),
                    image_url=q.image_url,
                    context=q.context,
                )
                for q in quiz.questions
            ],
        )

    @app.post("/quizzes/{quiz_id:int}/submit", response_model=SubmitResponse, summary="답안 제출·채점")
    def submit_quiz(quiz_id: int, body: SubmitRequest) -> SubmitResponse:
        result = svc.scoring.grade_submission(quiz_id, body.user_id, body.answers)
        return SubmitResponse(
            score=result.score,
            correct_answers=result.correct_count,
            total_questions=result.total_count,
            questions=result.questions,
            rank=result.rank,
        )

    # ----- 리더보드 -----

    @app.get("/leaderboard", response_model=list[LeaderboardEntry], summary="퀴즈별 순위표")
    def leaderboard(limit: int = Query(50, ge=1, le=500)) -> list[LeaderboardEntry]:
        return svc.users.leaderboard(limit)

    @app.get("/leaderboard/top", response_model=list[TopScore], summary="평균 점수 상위 사용자")
    def top_scores(limit: int = Query(5, ge=1, le=100)) -> list[TopScore]:
        return svc.users.top_scores(limit)

    # ----- 사전 -----

    @app.get("/dictionary/{word}", response_model=DictionaryEntry, summary="단어 정의 조회")
    def dictionary(word: str) -> DictionaryEntry:
        try:
            return svc.dictionary.fetch_definition(word)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app.get("/health", include_in_schema=False)
    def health() -> dict[str, str]:
        return {"status": "ok", "project": settings.PROJECT_NAME}

    return app


app = create_app()
