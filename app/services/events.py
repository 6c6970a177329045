"""
services/events.py

동아리 행사(Event) 비즈니스 로직 모음.

주요 기능:
- 상태 / 동아리 / 검색어 필터 + 페이지네이션 목록
- 행사 생성 (항상 upcoming 상태로 시작)
- 참석 / 참석 취소 (멱등, 참석자 중복 없음)
- 내 행사 (주최 / 참석) 및 동아리별 행사 조회

설계 원칙:
- status 는 시간이 지나도 자동으로 바뀌지 않음
- 정원(maxAttendees)이 찬 행사나 종료된 행사에는 참석 불가

관련 파일:
- app.models.event      : Event / EventAttendee 모델
- app.routers.events    : 행사 API

"""

import datetime

from loguru import logger
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.core.errors import Conflict, NotFound, ValidationError, require_fields
from app.models.club import Club
from app.models.event import Event, EventAttendee, EventStatus
from app.models.user import User
from app.services.identity import find_user
from app.services.pagination import Page, paginate
from app.services.serializers import isoformat, user_brief


def _as_utc(value: datetime.datetime | None) -> datetime.datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value


def attendee_ids(db: Session, event_id: str) -> list[str]:
    return list(
        db.scalars(
            select(EventAttendee.user_id).where(EventAttendee.event_id == event_id).order_by(EventAttendee.joined_at)
        ).all()
    )


def attendee_count(db: Session, event_id: str) -> int:
    return db.scalar(select(func.count()).select_from(EventAttendee).where(EventAttendee.event_id == event_id)) or 0


def is_attending(db: Session, event_id: str, user_id: str) -> bool:
    return db.get(EventAttendee, (event_id, user_id)) is not None


def event_public(db: Session, event: Event) -> dict:
    club = db.get(Club, event.club_id)
    attendees = attendee_ids(db, event.id)
    return {
        "_id": event.id,
        "title": event.title,
        "description": event.description,
        "clubId": {"_id": club.id, "name": club.name} if club else {"_id": event.club_id, "name": None},
        "organizer": user_brief(find_user(db, event.organizer_id), with_email=False),
        "dateTime": isoformat(event.starts_at),
        "endDateTime": isoformat(event.ends_at),
        "location": event.location,
        "status": event.status.value,
        "attendees": attendees,
        "attendeeCount": len(attendees),
        "maxAttendees": event.max_attendees,
        "createdAt": isoformat(event.created_at),
    }


def _ordered(stmt):
    return stmt.order_by(Event.starts_at, Event.id)


def list_events(
    db: Session,
    *,
    status: str | None = None,
    club_id: str | None = None,
    search: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> Page:
    stmt = select(Event)
    if status and status != "all":
        stmt = stmt.where(Event.status == EventStatus(status))
    if club_id:
        stmt = stmt.where(Event.club_id == club_id)
    if search:
        pattern = f"%{search.lower()}%"
        stmt = stmt.where(or_(Event.title.ilike(pattern), Event.description.ilike(pattern)))

    events = db.scalars(_ordered(stmt)).all()
    return paginate(events, page, limit)


def get_event(db: Session, event_id: str) -> Event:
    event = db.get(Event, event_id)
    if not event:
        raise NotFound("Event not found")
    return event


"""
행사 생성

- title / clubId 가 없으면 ValidationError
- 존재하지 않는 동아리면 NotFound
- 종료 시각이 시작 시각보다 빠르거나 같으면 ValidationError
- 주최자는 요청한 사용자, 상태는 upcoming

"""

def create_event(
    db: Session,
    organizer: User,
    *,
    title: str | None,
    club_id: str | None,
    description: str | None = None,
    starts_at: datetime.datetime | None = None,
    ends_at: datetime.datetime | None = None,
    location: str | None = None,
    max_attendees: int | None = None,
) -> Event:
    require_fields(title=title, clubId=club_id)

    if not db.get(Club, club_id):
        raise NotFound("Club not found")

    starts_at, ends_at = _as_utc(starts_at), _as_utc(ends_at)
    if starts_at and ends_at and ends_at <= starts_at:
        raise ValidationError("Event end time must be after start time")

    event = Event(
        title=title,
        description=description or "",
        club_id=club_id,
        organizer_id=organizer.id,
        starts_at=starts_at,
        ends_at=ends_at,
        location=location,
        max_attendees=max_attendees,
        status=EventStatus.UPCOMING,
        is_seeded=False,
    )
    db.add(event)
    db.flush()

    logger.info(f"Event created: {event.title} ({event.id}) in club {club_id} by {organizer.email}")
    return event


def join_event(db: Session, event_id: str, user: User) -> Event:
    event = get_event(db, event_id)

    if is_attending(db, event.id, user.id):
        return event

    if event.status != EventStatus.UPCOMING:
        raise Conflict("Cannot join past events")

    if event.max_attendees is not None and attendee_count(db, event.id) >= event.max_attendees:
        raise Conflict("Event is full")

    db.add(EventAttendee(event_id=event.id, user_id=user.id))
    db.flush()
    logger.info(f"User {user.id} joined event {event.id}")
    return event


def leave_event(db: Session, event_id: str, user: User) -> Event:
    event = get_event(db, event_id)

    row = db.get(EventAttendee, (event.id, user.id))
    if row is not None:
        db.delete(row)
        db.flush()
        logger.info(f"User {user.id} left event {event.id}")
    return event


def attending(db: Session, user: User) -> list[Event]:
    stmt = select(Event).join(EventAttendee, EventAttendee.event_id == Event.id).where(EventAttendee.user_id == user.id)
    return list(db.scalars(_ordered(stmt)).all())


def organizing(db: Session, user: User) -> list[Event]:
    return list(db.scalars(_ordered(select(Event).where(Event.organizer_id == user.id))).all())


"""
내 행사

- type=organizing : 주최한 행사
- type=attending  : 참석 중인 행사
- 그 외           : 주최 + 참석 (중복 제외)
- status 필터 ('all' 은 필터 없음)

"""

def my_events(db: Session, user: User, *, type: str | None = None, status: str | None = None) -> list[Event]:
    if type == "organizing":
        events = organizing(db, user)
    elif type == "attending":
        events = attending(db, user)
    else:
        events = organizing(db, user)
        events += [e for e in attending(db, user) if e.organizer_id != user.id]

    if status and status != "all":
        events = [e for e in events if e.status.value == status]
    return events


def club_events(db: Session, club_id: str, *, status: str = "upcoming", limit: int | None = 10) -> list[Event]:
    stmt = select(Event).where(Event.club_id == club_id)
    if status != "all":
        stmt = stmt.where(Event.status == EventStatus(status))
    stmt = _ordered(stmt)
    if limit:
        stmt = stmt.limit(limit)
    return list(db.scalars(stmt).all())


def count_events(db: Session, *, status: EventStatus | None = None) -> int:
    stmt = select(func.count()).select_from(Event)
    if status is not None:
        stmt = stmt.where(Event.status == status)
    return db.scalar(stmt) or 0
