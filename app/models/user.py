"""
user.py

사용자(User), 권한(Role), 접근 토큰(AccessToken) 모델 정의 파일.

이 파일은 캠퍼스 동아리 서비스 사용자의 기본 정보와
권한(Role), 발급된 접근 토큰을 관리한다.

모든 인증, 권한, 동아리 가입, 관리자 기능의 기준이 되는 핵심 모델이다.

"""

import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Enum as SAEnum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, id_factory, utcnow



"""
사용자 권한(Role) 정의

- SUPER_ADMIN : 전체 관리자 (모든 동아리 관리 가능)
- CLUB_HEAD   : 동아리 회장 (자신이 admin 으로 등록된 동아리 관리)
- STUDENT     : 일반 학생

"""

class Role(str, Enum):
    SUPER_ADMIN = "super_admin"
    CLUB_HEAD = "club_head"
    STUDENT = "student"



"""
사용자(User) 모델

- 시드 사용자(is_seeded=True)는 비밀번호가 없고 이메일만으로 로그인
- 회원가입 사용자는 password_hash 보유, 같은 이메일 재가입 시 덮어쓰기
- email 은 고유하지 않음 (시드 사용자와 가입 사용자가 같은 이메일을 가질 수 있음)
- 사용자 삭제는 지원하지 않음

"""

class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(40), primary_key=True, default=id_factory("user"))

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)

    role: Mapped[Role] = mapped_column(SAEnum(Role, name="user_role"), default=Role.STUDENT, nullable=False)

    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_seeded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


"""
접근 토큰(AccessToken) 모델

- 로그인 / 회원가입 시마다 새 토큰 발급
- 만료 / 폐기 없음

"""

class AccessToken(Base):
    __tablename__ = "access_tokens"

    token: Mapped[str] = mapped_column(String(100), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(40), ForeignKey("users.id"), nullable=False, index=True)
    issued_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
