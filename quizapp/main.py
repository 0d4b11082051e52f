"""
퀴즈 CLI.

사용 예:
  python -m quizapp.main init-db
  python -m quizapp.main categories
  python -m quizapp.main build --category 9 --difficulty easy --count 3 --pretty
  python -m quizapp.main build --category 9 --count 5 --save --title "General" --user-id 1
  python -m quizapp.main serve --port 8080
로그는 stderr, JSON 결과는 stdout으로 출력된다.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from quizapp.core.config import settings
from quizapp.core.errors import QuizAppError
from quizapp.db.connection import engine, init_db
from quizapp.services.container import build_services

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def dump(data, pretty: bool) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2 if pretty else None)


def cmd_init_db(args: argparse.Namespace) -> int:
    init_db(engine, seed_test_user=settings.SEED_TEST_USER)
    logger.info("DB 초기화 완료 url=%s", engine.url.render_as_string(hide_password=True))
    return 0


def cmd_categories(args: argparse.Namespace) -> int:
    services = build_services()
    categories = services.builder.list_categories()
    print(dump([c.model_dump() for c in categories], args.pretty))
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    services = build_services()
    if args.save:
        if not args.title or args.user_id is None:
            print("--save에는 --title, --user-id가 필요합니다.", file=sys.stderr)
            return 2
        quiz_id, questions = services.quizzes.create_quiz(
            title=args.title,
            creator_id=args.user_id,
            category_id=args.category,
            difficulty=args.difficulty,
            count=args.count,
            policy=args.policy,
        )
        logger.info("퀴즈 저장 완료 quiz_id=%s", quiz_id)
        payload = {"quiz_id": quiz_id, "questions": [q.model_dump() for q in questions]}
    else:
        questions = services.builder.build_quiz(
            args.category, args.difficulty, args.count, policy=args.policy
        )
        payload = {"questions": [q.model_dump() for q in questions]}
    print(dump(payload, args.pretty))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("quizapp.api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="트리비아 퀴즈 생성·관리 CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="테이블 생성 (+ 빈 DB면 test 사용자)")
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser("categories", help="트리비아 카테고리 목록")
    p.add_argument("--pretty", action="store_true", help="예쁘게 출력")
    p.set_defaults(func=cmd_categories)

    p = sub.add_parser("build", help="문항 조회·보강 (선택 시 저장)")
    p.add_argument("--category", type=int, default=0, help="카테고리 ID (0이면 전체)")
    p.add_argument("--difficulty", choices=["easy", "medium", "hard"], help="난이도")
    p.add_argument("--count", type=int, default=10, help="문항 수")
    p.add_argument("--policy", choices=["degrade", "strict"], help="보강 실패 처리 정책")
    p.add_argument("--save", action="store_true", help="퀴즈로 저장")
    p.add_argument("--title", help="퀴즈 제목 (--save 시)")
    p.add_argument("--user-id", type=int, help="만든 사용자 ID (--save 시)")
    p.add_argument("--pretty", action="store_true", help="예쁘게 출력")
    p.set_defaults(func=cmd_build)

    p = sub.add_parser("serve", help="API 서버 실행 (uvicorn)")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8080)
    p.add_argument("--reload", action="store_true")
    p.set_defaults(func=cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (QuizAppError, ValueError) as exc:
        print(f"실패: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
