"""
services/admin.py

전체 관리자(super_admin) 전용 비즈니스 로직(Service) 모음.

이 파일은 /admin 하위 API 에서 사용하는
사용자 권한 변경 / 동아리 회장 지정 / 사용자 삭제 정책을 담당한다.

주요 기능:
- 사용자 권한 변경 (club_head 지정 시 동아리 admin 목록 재배치)
- 동아리 회장(첫 번째 admin) 지정
- 회장이 없는 동아리 조회
- 사용자 삭제 요청 (기록만 하고 실제 삭제하지 않음)

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 트랜잭션 제어는 라우터에서 수행
- 모든 변경은 admin_action_logs 에 기록

관련 파일:
- app.models.user        : User / Role 모델
- app.models.club        : Club.admin_ids
- app.routers.admin      : 관리자 API

"""

from loguru import logger
from sqlalchemy.orm import Session

from app.core.errors import ValidationError, require_fields
from app.models.admin_log import AdminAction
from app.models.club import Club
from app.models.user import Role, User
from app.services.admin_log import write_admin_log
from app.services.clubs import all_clubs, get_club
from app.services.identity import get_user


def _strip_admin(db: Session, user_id: str) -> list[str]:
    """모든 동아리 admin 목록에서 사용자를 제거하고, 제거된 동아리 id 목록을 반환"""
    touched = []
    for club in all_clubs(db):
        admins = list(club.admin_ids or [])
        if user_id in admins:
            # JSON 컬럼은 재할당해야 변경이 감지됨
            club.admin_ids = [a for a in admins if a != user_id]
            touched.append(club.id)
    return touched


def _make_head(club: Club, user_id: str) -> None:
    admins = [a for a in (club.admin_ids or []) if a != user_id]
    club.admin_ids = [user_id, *admins]


"""
사용자 권한 변경

- 존재하지 않는 사용자면 NotFound
- club_head : 모든 동아리 admin 목록에서 제거한 뒤,
              clubId 가 주어지면 해당 동아리의 첫 번째 admin(회장)으로 추가
- student   : 모든 동아리 admin 목록에서 제거
- super_admin : 권한만 변경

"""

def set_role(db: Session, actor: User, user_id: str, role: Role | None, club_id: str | None = None) -> User:
    require_fields("Role is required", role=role)

    user = get_user(db, user_id)
    club = get_club(db, club_id) if club_id else None

    before = user.role
    user.role = role

    if role in (Role.CLUB_HEAD, Role.STUDENT):
        removed = _strip_admin(db, user.id)
        if removed:
            logger.info(f"Removed user {user.id} as admin from clubs {removed}")

    if role == Role.CLUB_HEAD and club is not None:
        _make_head(club, user.id)
        logger.info(f"Added user {user.id} as primary admin to club {club.id}")

    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.SET_ROLE,
        club_id=club.id if club else None,
        target_user_id=user.id,
        detail=f"{before.value} -> {role.value}",
    )
    db.flush()

    logger.info(f"Admin {actor.id} updated user {user.id} role to {role.value}")
    return user


def promote_club_head(db: Session, actor: User, user_id: str | None, club_id: str | None) -> User:
    require_fields(userId=user_id, clubId=club_id)
    return set_role(db, actor, user_id, Role.CLUB_HEAD, club_id)


"""
동아리 회장 지정

- 해당 사용자를 동아리 admin 목록 맨 앞으로 이동
- student 였다면 club_head 로 승격 (다른 동아리 admin 자격은 유지)

"""

def assign_head(db: Session, actor: User, club_id: str, user_id: str | None) -> Club:
    require_fields("User ID is required", userId=user_id)

    club = get_club(db, club_id)
    user = get_user(db, user_id)

    _make_head(club, user.id)
    if user.role == Role.STUDENT:
        user.role = Role.CLUB_HEAD

    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.ASSIGN_HEAD,
        club_id=club.id,
        target_user_id=user.id,
    )
    db.flush()

    logger.info(f"Admin {actor.id} assigned user {user.id} as head of club {club.id}")
    return club


def delete_user(db: Session, actor: User, user_id: str) -> None:
    """사용자 삭제 요청. 기록만 남기고 신원 저장소는 변경하지 않는다."""
    if user_id == actor.id:
        raise ValidationError("Cannot delete your own account")

    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.DELETE_USER,
        target_user_id=user_id,
        detail="not applied",
    )
    db.flush()
    logger.info(f"Admin {actor.id} requested deletion of user {user_id}")


def clubs_without_head(db: Session) -> list[Club]:
    return [c for c in all_clubs(db) if not c.admin_ids]
