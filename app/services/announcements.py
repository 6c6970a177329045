"""
services/announcements.py

동아리 공지(Announcement) 비즈니스 로직 모음.

- 목록은 항상 최신순
- 생성만 지원 (수정 / 삭제 없음)
- 동아리 범위 공지 작성은 동아리 관리자만 가능

"""

from loguru import logger
from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from app.core.errors import NotFound, require_fields
from app.models.announcement import Announcement
from app.models.club import Club
from app.models.user import User
from app.services import membership
from app.services.identity import find_user
from app.services.pagination import Page, paginate
from app.services.serializers import announcement_public


def _newest_first(stmt):
    return stmt.order_by(desc(Announcement.created_at), desc(Announcement.id))


def to_public(db: Session, ann: Announcement) -> dict:
    return announcement_public(ann, find_user(db, ann.author_id))


def list_announcements(
    db: Session,
    *,
    club_id: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> Page:
    stmt = select(Announcement)
    if club_id:
        stmt = stmt.where(Announcement.club_id == club_id)
    return paginate(db.scalars(_newest_first(stmt)).all(), page, limit)


def club_announcements(db: Session, club_id: str) -> list[Announcement]:
    stmt = select(Announcement).where(Announcement.club_id == club_id)
    return list(db.scalars(_newest_first(stmt)).all())


def recent(db: Session, limit: int = 5) -> list[Announcement]:
    return list(db.scalars(_newest_first(select(Announcement)).limit(limit)).all())


def create_announcement(
    db: Session,
    author: User,
    *,
    club_id: str | None,
    title: str | None,
    content: str | None,
    require_manager: bool = False,
) -> Announcement:
    require_fields(title=title, content=content, clubId=club_id)

    club = db.get(Club, club_id)
    if not club:
        raise NotFound("Club not found")

    if require_manager:
        membership.ensure_can_manage(club, author, "post announcements")

    ann = Announcement(title=title, content=content, club_id=club.id, author_id=author.id)
    db.add(ann)
    db.flush()

    logger.info(f"New announcement created for club {club.id}: {title}")
    return ann
