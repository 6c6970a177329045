import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Enum as SAEnum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, id_factory, utcnow


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    COMPLETED = "completed"


class Event(Base):
    """동아리 행사 레코드.

    status 는 생성 시점에 정해지며 시간이 지나도 자동으로 바뀌지 않는다.
    """

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(40), primary_key=True, default=id_factory("event"))

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    club_id: Mapped[str] = mapped_column(String(40), ForeignKey("clubs.id"), nullable=False, index=True)
    organizer_id: Mapped[str] = mapped_column(String(40), ForeignKey("users.id"), nullable=False, index=True)

    starts_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    ends_at: Mapped[datetime.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    max_attendees: Mapped[int | None] = mapped_column(Integer, nullable=True)

    status: Mapped[EventStatus] = mapped_column(
        SAEnum(EventStatus, name="event_status"), default=EventStatus.UPCOMING, nullable=False
    )

    is_seeded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class EventAttendee(Base):
    """행사 참석자. (event_id, user_id) 복합 PK 로 중복 참석 불가"""

    __tablename__ = "event_attendees"

    event_id: Mapped[str] = mapped_column(String(40), ForeignKey("events.id"), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(40), ForeignKey("users.id"), primary_key=True)
    joined_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
