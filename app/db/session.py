"""
session.py

상태 저장소 엔진 및 세션(Session) 관리 파일.

이 파일은 SQLAlchemy Engine과 SessionLocal을 생성하여
애플리케이션 전반에서 공통으로 사용하는 저장소 연결을 관리한다.

기본 저장소는 프로세스 메모리 안의 SQLite 이다.
- 모든 요청이 같은 메모리 DB를 보도록 StaticPool(단일 커넥션) 사용
- 프로세스가 재시작되면 모든 런타임 데이터는 사라지고 시드 데이터로 돌아감

FastAPI 의존성(get_db)을 통해
요청 단위로 세션을 생성/종료하는 구조를 지원한다.

설계 원칙:
- 저장소 연결 설정은 한 곳에서만 정의
- 세션 생성/종료 책임을 명확히 분리
- 커밋 실패 시 롤백 후 500 응답으로 변환

관련 파일:
- app.core.config        : DATABASE_URL 설정
- app.core.deps          : get_db 의존성
- app.db.seed            : 시드 데이터 적재

"""

from fastapi import HTTPException
from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.db.base import Base


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # 메모리 DB는 커넥션마다 별도 DB가 되므로 커넥션 하나를 공유
        if ":memory:" in url or url.rstrip("/").endswith("sqlite") or url.endswith("pysqlite://"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    return create_engine(url, pool_pre_ping=True)


def init_schema(bind: Engine) -> None:
    # 모델 import (Base.metadata에 테이블 등록)
    from app.models import admin_log, announcement, club, event, user  # noqa: F401

    Base.metadata.create_all(bind=bind)


engine = build_engine(settings.DATABASE_URL)

# 요청 단위로 사용할 세션 팩토리
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("commit failed")
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")
