"""
SQLModel 테이블 정의 (users, quizzes, questions, quiz_results).
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, Text, UniqueConstraint, func
from sqlmodel import Field, SQLModel

from quizapp.schema.trivia import OPTION_DELIMITER


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    username: str = Field(nullable=False, unique=True)
    email: str = Field(nullable=False, unique=True)
    password: str = Field(nullable=False)
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), server_default=func.now()),
    )


class Quiz(SQLModel, table=True):
    """생성 후 수정·삭제 없음."""

    __tablename__ = "quizzes"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(nullable=False)
    created_by: int | None = Field(default=None, foreign_key="users.id")
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), server_default=func.now()),
    )


class Question(SQLModel, table=True):
    """options: 구분자로 이어 붙인 문자열 (정답 + 오답)."""

    __tablename__ = "questions"

    id: int | None = Field(default=None, primary_key=True)
    quiz_id: int = Field(nullable=False, foreign_key="quizzes.id", index=True)
    text: str = Field(sa_column=Column(Text, nullable=False))
    options: str = Field(sa_column=Column(Text, nullable=False))
    answer: str = Field(sa_column=Column(Text, nullable=False))
    image_url: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    context: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), server_default=func.now()),
    )

    def option_list(self) -> list[str]:
        return self.options.split(OPTION_DELIMITER)


class QuizResult(SQLModel, table=True):
    """(user, quiz) 당 최고 점수 1행. 점수는 더 높을 때만 갱신."""

    __tablename__ = "quiz_results"
    __table_args__ = (UniqueConstraint("user_id", "quiz_id"),)

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, foreign_key="users.id")
    quiz_id: int = Field(nullable=False, foreign_key="quizzes.id")
    score: float = Field(nullable=False)
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), server_default=func.now()),
    )
