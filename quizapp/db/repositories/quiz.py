"""
quizzes, questions 테이블 접근.
퀴즈 헤더와 문항은 한 트랜잭션으로 저장한다 (전부 저장되거나 전부 롤백).
"""

import logging
from typing import Sequence

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from quizapp.core.errors import NotFound, PersistenceError
from quizapp.db.models import Question, Quiz
from quizapp.schema.quiz import QuestionView, QuizStanding, QuizSummary, QuizView
from quizapp.schema.trivia import OPTION_DELIMITER, QuestionDraft

logger = logging.getLogger(__name__)


class QuizRepo:
    """퀴즈 저장/조회."""

    def create_quiz(
        self,
        session: Session,
        title: str,
        creator_id: int | None,
        questions: Sequence[QuestionDraft],
    ) -> int:
        try:
            quiz = Quiz(title=title, created_by=creator_id)
            session.add(quiz)
            session.flush()
            for q in questions:
                session.add(
                    Question(
                        quiz_id=quiz.id,
                        text=q.text,
                        options=OPTION_DELIMITER.join(q.options()),
                        answer=q.stored_answer(),
                        image_url=q.image_url,
                        context=q.context,
                    )
                )
            session.flush()
            quiz_id = quiz.id
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("퀴즈 저장 실패 → 롤백 title=%s", title)
            raise PersistenceError(f"failed to create quiz: {e}") from e
        logger.info("퀴즈 저장 완료 quiz_id=%s 문항 수=%d", quiz_id, len(questions))
        return quiz_id

    def get(self, session: Session, quiz_id: int) -> Quiz | None:
        return session.get(Quiz, quiz_id)

    def get_quiz(self, session: Session, quiz_id: int) -> QuizView:
        """퀴즈 + 문항 (id 오름차순). 없으면 NotFound."""
        quiz = session.get(Quiz, quiz_id)
        if quiz is None:
            raise NotFound(f"quiz {quiz_id} not found")
        return QuizView(
            id=quiz.id,
            title=quiz.title,
            created_by=quiz.created_by,
            questions=[
                QuestionView(
                    id=q.id,
                    text=q.text,
                    options=q.option_list(),
                    answer=q.answer,
                    image_url=q.image_url,
                    context=q.context,
                )
                for q in self.get_questions(session, quiz_id)
            ],
        )

    def get_questions(self, session: Session, quiz_id: int) -> list[Question]:
        stmt = select(Question).where(Question.quiz_id == quiz_id).order_by(Question.id.asc())
        return list(session.exec(stmt).all())

    def list_created_by(self, session: Session, user_id: int) -> list[QuizSummary]:
        stmt = (
            select(Quiz)
            .where(Quiz.created_by == user_id)
            .order_by(Quiz.created_at.desc(), Quiz.id.desc())
        )
        return [QuizSummary(id=q.id, title=q.title) for q in session.exec(stmt).all()]

    def list_with_user_standing(self, session: Session, user_id: int) -> list[QuizStanding]:
        """
        전체 퀴즈 + 해당 사용자의 점수·순위, 응시 인원, 최고 점수.
        응시하지 않은 퀴즈는 점수 0 / 순위 0. 최신 퀴즈 먼저.
        """
        sql = text("""
            SELECT
                q.id,
                q.title,
                COALESCE(qr.score, 0) AS user_score,
                COALESCE(r.result_rank, 0) AS user_rank,
                COALESCE(a.attempts, 0) AS total_attempts,
                COALESCE(a.high_score, 0) AS high_score
            FROM quizzes q
            LEFT JOIN quiz_results qr
                ON qr.quiz_id = q.id AND qr.user_id = :user_id
            LEFT JOIN (
                SELECT quiz_id, user_id,
                       RANK() OVER (PARTITION BY quiz_id ORDER BY score DESC) AS result_rank
                FROM quiz_results
            ) r ON r.quiz_id = q.id AND r.user_id = :user_id
            LEFT JOIN (
                SELECT quiz_id, COUNT(DISTINCT user_id) AS attempts, MAX(score) AS high_score
                FROM quiz_results
                GROUP BY quiz_id
            ) a ON a.quiz_id = q.id
            ORDER BY q.id DESC
        """)
        rows = session.execute(sql, {"user_id": user_id}).fetchall()
        return [
            QuizStanding(
                id=r[0],
                title=r[1],
                user_score=float(r[2]),
                rank=int(r[3]),
                total_attempts=int(r[4]),
                high_score=float(r[5]),
            )
            for r in rows
        ]


quiz_repo = QuizRepo()
