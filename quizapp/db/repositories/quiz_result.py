"""
quiz_results 테이블 접근: 최고 점수 upsert, 순위/리더보드 집계.

순위는 저장하지 않고 RANK() 윈도 함수로 매번 계산한다 (동점은 같은 순위, 1,1,3,...).
"""

from sqlalchemy import text
from sqlmodel import Session, select

from quizapp.db.models import QuizResult
from quizapp.schema.quiz import LeaderboardEntry, TopScore, UserStats


class QuizResultRepo:
    def upsert_best(self, session: Session, user_id: int, quiz_id: int, score: float) -> None:
        """
        (user, quiz) 결과를 저장. 이미 있으면 새 점수가 더 높을 때만 덮어쓴다.
        commit은 호출 측에서.
        """
        sql = text("""
            INSERT INTO quiz_results (user_id, quiz_id, score)
            VALUES (:user_id, :quiz_id, :score)
            ON CONFLICT (user_id, quiz_id)
            DO UPDATE SET score = excluded.score
            WHERE quiz_results.score < excluded.score
        """)
        session.execute(sql, {"user_id": user_id, "quiz_id": quiz_id, "score": score})

    def get(self, session: Session, user_id: int, quiz_id: int) -> QuizResult | None:
        stmt = select(QuizResult).where(
            QuizResult.user_id == user_id,
            QuizResult.quiz_id == quiz_id,
        )
        return session.exec(stmt).first()

    def get_rank(self, session: Session, quiz_id: int, user_id: int) -> int:
        """해당 퀴즈에서 사용자의 순위. 결과 행이 없으면 0."""
        sql = text("""
            SELECT result_rank
            FROM (
                SELECT user_id,
                       RANK() OVER (ORDER BY score DESC) AS result_rank
                FROM quiz_results
                WHERE quiz_id = :quiz_id
            ) ranked
            WHERE user_id = :user_id
        """)
        row = session.execute(sql, {"quiz_id": quiz_id, "user_id": user_id}).first()
        return int(row[0]) if row and row[0] is not None else 0

    def leaderboard(self, session: Session, limit: int = 50) -> list[LeaderboardEntry]:
        """퀴즈별 순위표 (퀴즈 id, 순위 순)."""
        sql = text("""
            SELECT u.username, q.title, qr.score,
                   RANK() OVER (PARTITION BY qr.quiz_id ORDER BY qr.score DESC) AS result_rank
            FROM quiz_results qr
            JOIN users u ON qr.user_id = u.id
            JOIN quizzes q ON qr.quiz_id = q.id
            ORDER BY qr.quiz_id, result_rank, u.username
            LIMIT :limit
        """)
        rows = session.execute(sql, {"limit": limit}).fetchall()
        return [
            LeaderboardEntry(username=r[0], quiz_name=r[1], score=float(r[2]), rank=int(r[3]))
            for r in rows
        ]

    def top_scores(self, session: Session, limit: int = 5) -> list[TopScore]:
        """평균 점수 기준 사용자 순위 (rank <= limit)."""
        sql = text("""
            SELECT result_rank, username, avg_score
            FROM (
                SELECT u.username,
                       AVG(qr.score) AS avg_score,
                       RANK() OVER (ORDER BY AVG(qr.score) DESC) AS result_rank
                FROM users u
                JOIN quiz_results qr ON u.id = qr.user_id
                GROUP BY u.id, u.username
            ) user_scores
            WHERE result_rank <= :limit
            ORDER BY result_rank, username
        """)
        rows = session.execute(sql, {"limit": limit}).fetchall()
        return [TopScore(rank=int(r[0]), username=r[1], score=float(r[2])) for r in rows]

    def user_stats(self, session: Session, user_id: int) -> UserStats:
        """응시한 퀴즈 수, 평균 점수, 평균 기준 전체 순위 (없으면 0)."""
        row = session.execute(
            text("""
                SELECT COUNT(DISTINCT quiz_id), COALESCE(AVG(score), 0)
                FROM quiz_results
                WHERE user_id = :user_id
            """),
            {"user_id": user_id},
        ).first()
        rank_row = session.execute(
            text("""
                SELECT result_rank
                FROM (
                    SELECT user_id,
                           RANK() OVER (ORDER BY AVG(score) DESC) AS result_rank
                    FROM quiz_results
                    GROUP BY user_id
                ) user_ranks
                WHERE user_id = :user_id
            """),
            {"user_id": user_id},
        ).first()
        return UserStats(
            quizzes_taken=int(row[0]) if row else 0,
            average_score=float(row[1]) if row else 0.0,
            global_rank=int(rank_row[0]) if rank_row else 0,
        )


quiz_result_repo = QuizResultRepo()
