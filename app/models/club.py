"""
club.py

동아리(Club), 카테고리(Category), 동아리 회원(ClubMember),
가입 요청(MembershipRequest) 모델 정의 파일.

설계 원칙:
- 회원 수는 저장하지 않는다. 항상 club_members 행 수로 계산
- admin_ids 는 순서 있는 목록이며 첫 번째 admin 이 동아리 회장(club head)
- club_members / membership_requests 는 app.services.membership 만 변경
- 가입 요청은 (동아리, 사용자) 쌍마다 여러 건이 쌓일 수 있고
  가장 최근 요청이 현재 상태를 결정

"""

import datetime
from enum import Enum

from sqlalchemy import JSON, Boolean, DateTime, Enum as SAEnum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, id_factory, utcnow


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(40), primary_key=True, default=id_factory("cat"))
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    icon: Mapped[str | None] = mapped_column(String(10), nullable=True)


class Club(Base):
    __tablename__ = "clubs"

    id: Mapped[str] = mapped_column(String(40), primary_key=True, default=id_factory("club"))

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category_id: Mapped[str | None] = mapped_column(String(40), ForeignKey("categories.id"), nullable=True)
    logo: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # 가입 정책
    allow_joining: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    require_approval: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    max_members: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # 순서 유지, 첫 번째가 club head (in-place 수정 금지, 새 list로 재할당)
    admin_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    is_seeded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[str | None] = mapped_column(String(40), ForeignKey("users.id"), nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class ClubMember(Base):
    __tablename__ = "club_members"

    club_id: Mapped[str] = mapped_column(String(40), ForeignKey("clubs.id"), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(40), ForeignKey("users.id"), primary_key=True)
    joined_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


"""
가입 요청(MembershipRequest) 모델

- seq              : 삽입 순서 (requested_at 이 같을 때 최신 판정용)
- user_*           : 요청 시점의 요청자 신원 스냅샷
- decided_at/by    : 승인 또는 거절 시각 / 처리한 관리자
- rejection_reason : 거절 사유

"""

class MembershipRequest(Base):
    __tablename__ = "membership_requests"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(60), unique=True, index=True, nullable=False, default=id_factory("req"))

    club_id: Mapped[str] = mapped_column(String(40), ForeignKey("clubs.id"), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(40), ForeignKey("users.id"), nullable=False, index=True)

    user_first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    user_last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    user_email: Mapped[str] = mapped_column(String(255), nullable=False)
    user_role: Mapped[str] = mapped_column(String(20), nullable=False)

    status: Mapped[RequestStatus] = mapped_column(
        SAEnum(RequestStatus, name="membership_request_status"), default=RequestStatus.PENDING, nullable=False
    )
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")

    requested_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    decided_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    decided_by: Mapped[str | None] = mapped_column(String(40), ForeignKey("users.id"), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
