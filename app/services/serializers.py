"""
services/serializers.py

ORM 객체 → 응답 JSON(dict) 변환 헬퍼 모음.

프론트엔드가 기대하는 형태(camelCase, `_id`)로 변환하며
비밀번호 해시 등 내부 필드는 절대 포함하지 않는다.

"""

from datetime import datetime, timezone

from app.models.announcement import Announcement
from app.models.club import Category, MembershipRequest, RequestStatus
from app.models.user import User


def isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    # SQLite 는 tz 정보를 보존하지 않으므로 naive 값은 UTC 로 간주
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def user_public(user: User) -> dict:
    return {
        "_id": user.id,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "email": user.email,
        "role": user.role.value,
        "createdAt": isoformat(user.created_at),
    }


def user_brief(user: User | None, *, with_email: bool = True) -> dict | None:
    if user is None:
        return None
    data = {
        "_id": user.id,
        "firstName": user.first_name,
        "lastName": user.last_name,
    }
    if with_email:
        data["email"] = user.email
    return data


def category_public(category: Category | None) -> dict | None:
    if category is None:
        return None
    return {
        "_id": category.id,
        "name": category.name,
        "color": category.color,
        "icon": category.icon,
    }


def request_public(req: MembershipRequest) -> dict:
    data = {
        "_id": req.id,
        "clubId": req.club_id,
        "userId": req.user_id,
        "user": {
            "_id": req.user_id,
            "firstName": req.user_first_name,
            "lastName": req.user_last_name,
            "email": req.user_email,
            "role": req.user_role,
        },
        "status": req.status.value,
        "requestedAt": isoformat(req.requested_at),
        "message": req.message,
    }
    if req.status == RequestStatus.APPROVED:
        data["approvedAt"] = isoformat(req.decided_at)
        data["approvedBy"] = req.decided_by
    elif req.status == RequestStatus.REJECTED:
        data["rejectedAt"] = isoformat(req.decided_at)
        data["rejectedBy"] = req.decided_by
        data["rejectionReason"] = req.rejection_reason or ""
    return data


def announcement_public(ann: Announcement, author: User | None) -> dict:
    return {
        "_id": ann.id,
        "title": ann.title,
        "content": ann.content,
        "clubId": ann.club_id,
        "author": user_brief(author, with_email=False),
        "createdAt": isoformat(ann.created_at),
    }
