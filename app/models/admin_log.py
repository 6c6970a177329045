"""

admin_log.py

관리자(Admin) 행위 기록(Audit Log) 모델 정의 파일.

이 파일은 동아리 관리자 또는 전체 관리자에 의해 수행된 주요 관리 행위
(가입 요청 승인/거절, 회원 제외, 권한 변경, 동아리 삭제 등)를
저장소에 기록하기 위한 로그 테이블을 정의한다.

운영 중 발생할 수 있는 문제 추적,
권한 오남용 방지, 감사(Audit) 목적을 위한 모델이다.

설계 원칙:
- 실제 데이터 변경과 로그 기록을 분리
- 로그 데이터는 수정/삭제하지 않는 것을 전제로 설계
- actor(행위자)와 target(대상 사용자 / 동아리 / 요청)을 명확히 구분

"""

import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow



#  관리자 행위 유형 Enum

class AdminAction(str, Enum):
    APPROVE_REQUEST = "APPROVE_REQUEST"
    REJECT_REQUEST = "REJECT_REQUEST"
    REMOVE_MEMBER = "REMOVE_MEMBER"
    UPDATE_SETTINGS = "UPDATE_SETTINGS"
    DELETE_CLUB = "DELETE_CLUB"
    SET_ROLE = "SET_ROLE"
    ASSIGN_HEAD = "ASSIGN_HEAD"
    DELETE_USER = "DELETE_USER"


"""
관리자 행위 로그 모델

- actor_id          : 행위를 수행한 관리자 ID
- action            : 수행된 관리자 행위 유형
- club_id           : 대상 동아리 ID (없을 수 있음)
- target_user_id    : 행위 대상 사용자 ID (없을 수 있음)
- target_request_id : 대상 가입 요청 ID (없을 수 있음)
- detail            : 변경 전/후 권한, 거절 사유 등 부가 정보
- created_at        : 행위 발생 시각 (UTC)

"""

class AdminActionLog(Base):
    __tablename__ = "admin_action_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    actor_id: Mapped[str] = mapped_column(String(40), ForeignKey("users.id"), nullable=False)
    action: Mapped[AdminAction] = mapped_column(SAEnum(AdminAction, name="admin_action"), nullable=False)

    club_id: Mapped[str | None] = mapped_column(String(40), nullable=True)
    target_user_id: Mapped[str | None] = mapped_column(String(40), nullable=True)
    target_request_id: Mapped[str | None] = mapped_column(String(60), nullable=True)

    detail: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
