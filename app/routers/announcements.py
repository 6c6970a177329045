from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_user_or_default, get_db
from app.db.session import commit
from app.models.user import User
from app.schemas.announcement import AnnouncementCreate
from app.services import announcements

router = APIRouter(prefix="/announcements", tags=["announcements"])


# 공지 목록 (최신순, clubId 필터)
@router.get("")
def list_announcements(
    club_id: str | None = Query(default=None, alias="clubId"),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    result = announcements.list_announcements(db, club_id=club_id, page=page, limit=limit)
    return {
        "success": True,
        "data": [announcements.to_public(db, a) for a in result.items],
        "pagination": result.meta(),
    }


# 최근 공지 5건
@router.get("/recent")
def recent_announcements(db: Session = Depends(get_db)):
    return {"success": True, "data": [announcements.to_public(db, a) for a in announcements.recent(db)]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_announcement(
    data: AnnouncementCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_or_default),
):
    ann = announcements.create_announcement(
        db,
        user,
        club_id=data.club_id,
        title=data.title,
        content=data.content,
    )
    commit(db)

    return {
        "success": True,
        "message": "Announcement created successfully",
        "data": announcements.to_public(db, ann),
    }
