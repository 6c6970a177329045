import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, id_factory, utcnow


class Announcement(Base):
    """동아리 공지 레코드. 생성만 지원 (수정/삭제 없음)"""

    __tablename__ = "announcements"

    id: Mapped[str] = mapped_column(String(40), primary_key=True, default=id_factory("ann"))

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    club_id: Mapped[str] = mapped_column(String(40), ForeignKey("clubs.id"), nullable=False, index=True)
    author_id: Mapped[str] = mapped_column(String(40), ForeignKey("users.id"), nullable=False)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
