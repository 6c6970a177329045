"""
services/dashboard.py

대시보드 / 집계 조회 로직 모음.

모든 값은 요청 시점의 현재 상태에서 계산하며
어떤 상태도 변경하지 않는다 (캐시 없음).

주요 기능:
- 역할별 통계 (super_admin / club_head / student)
- 대시보드 개요 (내 동아리, 다가오는 행사, 최근 공지)
- 관리자 대시보드 / 회원 동아리 조회

관련 파일:
- app.routers.dashboard  : /dashboard API
- app.routers.admin      : /admin API

"""

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from app.models.club import Club, ClubMember
from app.models.event import EventStatus
from app.models.user import Role, User
from app.services import announcements, clubs, events, membership
from app.services.identity import count_users
from app.services.serializers import user_public


def registered_users(db: Session, limit: int | None = None) -> list[User]:
    stmt = select(User).where(User.is_seeded.is_(False)).order_by(desc(User.created_at), desc(User.id))
    if limit:
        stmt = stmt.limit(limit)
    return list(db.scalars(stmt).all())


def count_clubs(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(Club)) or 0


def totals(db: Session) -> dict:
    return {
        "totalClubs": count_clubs(db),
        "totalEvents": events.count_events(db),
        "totalMembers": count_users(db),
        "upcomingEvents": events.count_events(db, status=EventStatus.UPCOMING),
    }


"""
역할별 통계

- 공통        : totalClubs / totalEvents / totalMembers / upcomingEvents
- super_admin : adminClubs(전체), pendingApprovals(대기 요청 수),
                activeUsers(가입 사용자 수), recentRegistrations(최근 5명)
- club_head   : adminClubs(관리 동아리 수), organizingEvents(주최 행사 수)
- student     : joinedClubs(가입 동아리 수), attendingEvents(참석 행사 수)

"""

def stats(db: Session, user: User) -> dict:
    data = totals(db)

    if user.role == Role.SUPER_ADMIN:
        data["adminClubs"] = data["totalClubs"]
        data["pendingApprovals"] = membership.count_pending(db)
        data["activeUsers"] = count_users(db, seeded=False)
        data["recentRegistrations"] = [user_public(u) for u in registered_users(db, limit=5)]
    elif user.role == Role.CLUB_HEAD:
        data["adminClubs"] = len(clubs.administered_clubs(db, user))
        data["organizingEvents"] = len(events.organizing(db, user))
    else:
        data["joinedClubs"] = len(membership.clubs_of_user(db, user.id))
        data["attendingEvents"] = len(events.attending(db, user))

    return data


def overview(db: Session, user: User) -> dict:
    my = clubs.my_clubs(db, user)
    my = my[:4] if user.role == Role.SUPER_ADMIN else my[:3]

    upcoming = events.list_events(db, status=EventStatus.UPCOMING.value, limit=3).items

    return {
        "user": user_public(user),
        "myClubs": [clubs.club_summary(db, c) for c in my],
        "upcomingEvents": [events.event_public(db, e) for e in upcoming],
        "recentAnnouncements": [announcements.to_public(db, a) for a in announcements.recent(db, limit=3)],
        "stats": stats(db, user),
    }


def admin_dashboard(db: Session) -> dict:
    recent_clubs = db.scalars(
        select(Club).where(Club.is_seeded.is_(False)).order_by(desc(Club.created_at), desc(Club.id)).limit(3)
    ).all()
    return {
        "totalUsers": count_users(db),
        "totalClubs": count_clubs(db),
        "totalEvents": events.count_events(db),
        "activeEvents": events.count_events(db, status=EventStatus.UPCOMING),
        "pendingApprovals": membership.count_pending(db),
        "recentRegistrations": [user_public(u) for u in registered_users(db, limit=5)],
        "recentClubs": [clubs.club_summary(db, c) for c in recent_clubs],
    }


def member_clubs(db: Session, user_id: str) -> list[Club]:
    stmt = (
        select(Club)
        .join(ClubMember, ClubMember.club_id == Club.id)
        .where(ClubMember.user_id == user_id)
        .order_by(Club.is_seeded.desc(), Club.created_at, Club.id)
    )
    return list(db.scalars(stmt).all())


def all_users(db: Session) -> list[User]:
    # 시드 사용자 먼저, 그 다음 가입 순서
    return list(db.scalars(select(User).order_by(User.is_seeded.desc(), User.created_at, User.id)).all())
