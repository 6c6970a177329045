"""
events.py

동아리 행사(Event) API 모음.

주요 기능:
- 행사 목록 (status / clubId / search 필터 + 페이지네이션) / 상세
- 행사 생성
- 참석 / 참석 취소 (DELETE, POST 둘 다 지원)
- 내 행사 / 참석 중인 행사 / 동아리별 행사

설계 원칙:
- /events/user/* , /events/club/* 는 /events/{event_id} 보다 먼저 등록
- 토큰이 없으면 기본 시드 사용자로 동작

관련 파일:
- app.services.events     : 행사 비즈니스 로직
- app.schemas.event       : EventCreate

"""

from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_user_or_default, get_db
from app.db.session import commit
from app.models.user import User
from app.schemas.event import EventCreate
from app.services import events

router = APIRouter(prefix="/events", tags=["events"])

StatusFilter = Literal["upcoming", "completed", "all"]


@router.get("")
def list_events(
    status: StatusFilter | None = None,
    club_id: str | None = Query(default=None, alias="clubId"),
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    result = events.list_events(db, status=status, club_id=club_id, search=search, page=page, limit=limit)
    return {
        "success": True,
        "data": [events.event_public(db, e) for e in result.items],
        "pagination": result.meta(),
    }


"""
내 행사 API

- type=organizing : 주최한 행사
- type=attending  : 참석 중인 행사
- 미지정          : 둘 다
- status 필터 (upcoming / completed / all)

"""

@router.get("/user/my-events")
def my_events(
    type: Literal["organizing", "attending"] | None = None,
    status: StatusFilter | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_or_default),
):
    result = events.my_events(db, user, type=type, status=status)
    return {"success": True, "data": [events.event_public(db, e) for e in result]}


@router.get("/user/attending")
def attending(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_or_default),
):
    return {"success": True, "data": [events.event_public(db, e) for e in events.attending(db, user)]}


@router.get("/club/{club_id}")
def club_events(
    club_id: str,
    status: StatusFilter = "upcoming",
    limit: int = Query(default=10, ge=1),
    db: Session = Depends(get_db),
):
    result = events.club_events(db, club_id, status=status, limit=limit)
    return {"success": True, "data": [events.event_public(db, e) for e in result]}


@router.get("/{event_id}")
def get_event(event_id: str, db: Session = Depends(get_db)):
    event = events.get_event(db, event_id)
    return {"success": True, "data": events.event_public(db, event)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_event(
    data: EventCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_or_default),
):
    event = events.create_event(
        db,
        user,
        title=data.title,
        club_id=data.club_id,
        description=data.description,
        starts_at=data.date_time,
        ends_at=data.end_date_time,
        location=data.location,
        max_attendees=data.max_attendees,
    )
    commit(db)

    return {
        "success": True,
        "message": "Event created successfully",
        "data": events.event_public(db, event),
    }


@router.post("/{event_id}/join")
def join_event(
    event_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_or_default),
):
    event = events.join_event(db, event_id, user)
    commit(db)
    return {"success": True, "message": "Successfully joined event", "data": events.event_public(db, event)}


@router.delete("/{event_id}/leave")
@router.post("/{event_id}/leave")
def leave_event(
    event_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_or_default),
):
    event = events.leave_event(db, event_id, user)
    commit(db)
    return {"success": True, "message": "Successfully left event", "data": events.event_public(db, event)}
