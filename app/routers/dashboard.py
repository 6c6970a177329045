"""
dashboard.py

대시보드 조회 API 모음.

- 역할별 통계 (super_admin / club_head / student)
- 대시보드 개요 (내 동아리 / 다가오는 행사 / 최근 공지 / 통계)
- 토큰이 없으면 기본 시드 사용자 기준으로 계산
- 어떤 상태도 변경하지 않음

"""

from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.orm import Session

from app.core.deps import get_current_user_or_default, get_db
from app.models.user import User
from app.services import dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats")
def stats(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_or_default),
):
    data = dashboard.stats(db, user)
    logger.debug(f"Dashboard stats for {user.role.value}: {data}")
    return {"success": True, "data": data}


@router.get("/overview")
def overview(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_or_default),
):
    return {"success": True, "data": dashboard.overview(db, user)}
