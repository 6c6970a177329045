"""
base.py

SQLAlchemy ORM Base 정의 파일.

이 파일은 모든 SQLAlchemy 모델이 상속받는
공통 Base 클래스와 id / 시각 생성 헬퍼를 정의한다.

모든 모델(User, Club, MembershipRequest, Event 등)은
이 Base를 기준으로 테이블 메타데이터가 관리되며,
앱 시작 시 Base.metadata.create_all 로 스키마가 생성된다.

설계 원칙:
- Base 정의는 단일 파일에서만 관리
- 모델 간 순환 참조 방지
- id 는 '<접두사>-<랜덤 hex>' 형태의 문자열 (시드 데이터의 'club1' 등과 공존)

관련 파일:
- app.models.*            : 모든 ORM 모델
- app.db.session          : 엔진 / 스키마 생성

"""

import uuid
from datetime import datetime, timezone
from functools import partial

from sqlalchemy.orm import declarative_base

# 모든 ORM 모델이 상속받는 Base 클래스
Base = declarative_base()


def generate_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def id_factory(prefix: str):
    return partial(generate_id, prefix)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
