"""
services/clubs.py

동아리(Club) 레지스트리 비즈니스 로직 모음.

이 파일은 동아리 목록 조회 / 상세 조회 / 생성 / 삭제 / 설정 변경과
회원 수, 동아리 회장(club head) 같은 파생 필드 계산을 담당한다.

주요 기능:
- 카테고리 / 검색어 필터 + 페이지네이션 목록
- 상세 조회 (회원 목록, 공지, 다가오는 행사 포함)
- 동아리 생성 (생성자가 유일한 admin 이자 회원)
- 동아리 삭제 (시드 동아리는 성공 응답만 주고 실제 삭제하지 않음)
- 가입 정책 설정 조회 / 변경

설계 원칙:
- HTTP / FastAPI 의존성 없음 (도메인 오류만 발생)
- 회원 수와 club head 는 응답 시점에 계산 (저장 금지)
- 회원 집합 변경은 app.services.membership 에 위임

관련 파일:
- app.models.club          : Club / Category 모델
- app.services.membership  : 회원 집합
- app.routers.clubs        : 동아리 API

"""

from loguru import logger
from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session

from app.core.errors import Forbidden, NotFound, require_fields
from app.models.admin_log import AdminAction
from app.models.announcement import Announcement
from app.models.club import Category, Club
from app.models.event import Event, EventAttendee
from app.models.user import Role, User
from app.services import announcements, events, membership
from app.services.admin_log import write_admin_log
from app.services.identity import find_user
from app.services.pagination import Page, paginate
from app.services.serializers import category_public, isoformat, user_brief


def list_categories(db: Session) -> list[Category]:
    return list(db.scalars(select(Category).order_by(Category.id)).all())


def all_clubs(db: Session) -> list[Club]:
    # 시드 동아리 먼저, 그 다음 생성 순서
    return list(db.scalars(select(Club).order_by(Club.is_seeded.desc(), Club.created_at, Club.id)).all())


def find_club(db: Session, club_id: str) -> Club | None:
    return db.get(Club, club_id)


def get_club(db: Session, club_id: str) -> Club:
    club = find_club(db, club_id)
    if not club:
        raise NotFound("Club not found")
    return club


def club_head(db: Session, club: Club) -> User | None:
    if not club.admin_ids:
        return None
    return find_user(db, club.admin_ids[0])


def club_summary(db: Session, club: Club) -> dict:
    category = db.get(Category, club.category_id) if club.category_id else None
    return {
        "_id": club.id,
        "name": club.name,
        "description": club.description,
        "category": category_public(category),
        "logo": club.logo,
        "contactEmail": club.contact_email,
        "allowJoining": club.allow_joining,
        "requireApproval": club.require_approval,
        "maxMembers": club.max_members,
        "admins": list(club.admin_ids or []),
        "memberCount": membership.member_count(db, club.id),
        "clubHead": user_brief(club_head(db, club)),
        "createdBy": club.created_by,
        "createdAt": isoformat(club.created_at),
    }


def members_detail(db: Session, club: Club) -> list[dict]:
    result = []
    for row in membership.member_rows(db, club.id):
        user = find_user(db, row.user_id)
        if not user:
            logger.warning(f"Member not found for ID: {row.user_id}")
            continue
        result.append(
            {
                "_id": user.id,
                "firstName": user.first_name,
                "lastName": user.last_name,
                "email": user.email,
                "role": user.role.value,
                "joinedAt": isoformat(row.joined_at),
            }
        )
    return result


"""
동아리 목록 조회

- category: 카테고리 id ('all' 또는 미지정이면 필터 없음)
- search  : 이름 / 설명 대소문자 무시 부분 일치
- page / limit 페이지네이션

"""

def list_clubs(
    db: Session,
    *,
    category: str | None = None,
    search: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> Page:
    stmt = select(Club)
    if category and category != "all":
        stmt = stmt.where(Club.category_id == category)
    if search:
        pattern = f"%{search.lower()}%"
        stmt = stmt.where(or_(Club.name.ilike(pattern), Club.description.ilike(pattern)))
    stmt = stmt.order_by(Club.is_seeded.desc(), Club.created_at, Club.id)

    clubs = db.scalars(stmt).all()
    return paginate(clubs, page, limit)


def create_club(
    db: Session,
    creator: User,
    *,
    name: str | None,
    description: str | None = None,
    category: str | None = None,
    contact_email: str | None = None,
    logo: str | None = None,
    allow_joining: bool = True,
    require_approval: bool = False,
    max_members: int | None = None,
) -> Club:
    require_fields("Club name is required", name=name)

    if category and not db.get(Category, category):
        raise NotFound("Category not found")

    club = Club(
        name=name,
        description=description or "",
        category_id=category,
        contact_email=contact_email,
        logo=logo,
        allow_joining=allow_joining,
        require_approval=require_approval,
        max_members=max_members,
        admin_ids=[creator.id],
        is_seeded=False,
        created_by=creator.id,
    )
    db.add(club)
    db.flush()

    membership.add_member(db, club.id, creator.id)

    logger.info(f"Club created: {club.name} ({club.id}) by {creator.email}")
    return club


def can_delete(club: Club, user: User) -> bool:
    return membership.can_manage(club, user) or club.created_by == user.id


"""
동아리 삭제

- 전체 관리자 / 생성자 / 동아리 admin 만 가능 (아니면 Forbidden)
- 시드 동아리는 삭제하지 않고 성공으로 응답 (호환성 유지)
- 생성 동아리는 회원, 가입 요청, 행사, 공지까지 함께 삭제
- 반환값: 실제로 삭제되었는지 여부

"""

def delete_club(db: Session, actor: User, club_id: str, *, require_super_admin: bool = False) -> bool:
    club = get_club(db, club_id)

    allowed = actor.role == Role.SUPER_ADMIN if require_super_admin else can_delete(club, actor)
    if not allowed:
        raise Forbidden("Access denied. Only club admins or super admins can delete clubs.")

    if club.is_seeded:
        logger.warning(f"Cannot delete seeded club {club_id}, returning success")
        return False

    event_ids = select(Event.id).where(Event.club_id == club.id)
    db.execute(delete(EventAttendee).where(EventAttendee.event_id.in_(event_ids)))
    db.execute(delete(Event).where(Event.club_id == club.id))
    db.execute(delete(Announcement).where(Announcement.club_id == club.id))
    membership.drop_club(db, club.id)

    write_admin_log(db, actor_id=actor.id, action=AdminAction.DELETE_CLUB, club_id=club.id, detail=club.name)
    db.delete(club)
    db.flush()

    logger.info(f"Deleted created club {club_id}")
    return True


def club_settings(club: Club) -> dict:
    return {
        "allowJoining": club.allow_joining,
        "requireApproval": club.require_approval,
        "maxMembers": club.max_members,
    }


def update_settings(
    db: Session,
    club: Club,
    actor: User,
    *,
    allow_joining: bool | None = None,
    require_approval: bool | None = None,
    max_members: int | None = None,
) -> Club:
    membership.ensure_can_manage(club, actor, "update club settings")

    if allow_joining is not None:
        club.allow_joining = allow_joining
    if require_approval is not None:
        club.require_approval = require_approval
    if max_members is not None:
        club.max_members = max_members

    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.UPDATE_SETTINGS,
        club_id=club.id,
        detail=f"allowJoining={club.allow_joining} requireApproval={club.require_approval}",
    )
    db.flush()
    logger.info(f"Updated settings for club {club.id}: {club_settings(club)}")
    return club


def toggle_joining(db: Session, club: Club, actor: User) -> Club:
    return update_settings(db, club, actor, allow_joining=not club.allow_joining)


"""
내 동아리 목록

- super_admin : 전체 동아리
- club_head   : admin 이거나 회원이거나 생성한 동아리
- student     : 회원이거나 생성한 동아리

"""

def my_clubs(db: Session, user: User) -> list[Club]:
    clubs = all_clubs(db)
    if user.role == Role.SUPER_ADMIN:
        return clubs

    joined = set(membership.clubs_of_user(db, user.id))

    def related(club: Club) -> bool:
        created = club.created_by == user.id or (club.contact_email is not None and club.contact_email == user.email)
        if club.id in joined or created:
            return True
        return user.role == Role.CLUB_HEAD and user.id in (club.admin_ids or [])

    return [c for c in clubs if related(c)]


def administered_clubs(db: Session, user: User) -> list[Club]:
    return [c for c in all_clubs(db) if user.id in (c.admin_ids or [])]


def club_detail(db: Session, club: Club) -> dict:
    members = members_detail(db, club)
    club_anns = announcements.club_announcements(db, club.id)
    club_evts = events.club_events(db, club.id, status="all", limit=3)

    data = club_summary(db, club)
    data.update(
        {
            "members": members,
            "announcements": [announcements.to_public(db, a) for a in club_anns],
            "upcomingEvents": [events.event_public(db, e) for e in club_evts],
            "isCreated": not club.is_seeded,
        }
    )
    logger.info(
        f"Club details for {club.name}: {len(members)} members, "
        f"{len(club_anns)} announcements, {len(club_evts)} events"
    )
    return data
