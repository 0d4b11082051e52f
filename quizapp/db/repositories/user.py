"""
users 테이블 접근.
"""

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from quizapp.core.errors import DuplicateUser
from quizapp.db.models import User


class UserRepo:
    def create(self, session: Session, *, username: str, email: str, password: str) -> User:
        stmt = select(User).where(or_(User.username == username, User.email == email))
        if session.exec(stmt).first():
            raise DuplicateUser("username or email already exists")
        user = User(username=username, email=email, password=password)
        session.add(user)
        try:
            session.commit()
        except IntegrityError as e:
            # 동시 가입 시 UNIQUE 제약으로 걸리는 경우
            session.rollback()
            raise DuplicateUser("username or email already exists") from e
        session.refresh(user)
        return user

    def get_by_id(self, session: Session, user_id: int) -> User | None:
        return session.get(User, user_id)

    def get_by_username(self, session: Session, username: str) -> User | None:
        return session.exec(select(User).where(User.username == username)).first()


user_repo = UserRepo()
