"""
admin.py

전체 관리자(super_admin) 전용 API 모음.

모든 엔드포인트는 토큰 필수(없으면 401)이며
super_admin 이 아니면 403 을 반환한다.

주요 기능:
- 사용자 목록 (페이지네이션) / 동아리 목록 / 관리자 대시보드
- 회장이 없는 동아리 조회
- 사용자 권한 변경 / 동아리 회장 지정
- 사용자 삭제 (기록만) / 동아리 삭제
- 사용자가 가입한 동아리 조회
- 관리자 행위 로그 조회

관련 파일:
- app.services.admin      : 권한 변경 / 회장 지정 정책
- app.services.dashboard  : 집계 조회
- app.services.admin_log  : 행위 로그

"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import desc, select
from sqlalchemy.orm import Session, aliased

from app.core.deps import get_current_superadmin, get_db
from app.db.session import commit
from app.models.admin_log import AdminActionLog
from app.models.user import User
from app.schemas.admin import AssignHead, PromoteClubHead, RoleUpdate
from app.services import admin, clubs, dashboard
from app.services.pagination import paginate
from app.services.serializers import isoformat, user_brief, user_public

router = APIRouter(prefix="/admin", tags=["admin"])


# 전체 사용자 목록 (시드 + 가입 사용자)
@router.get("/users")
def list_users(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_superadmin),
):
    result = paginate(dashboard.all_users(db), page, limit)
    meta = result.meta()
    meta["totalPages"] = meta["pages"]
    return {
        "success": True,
        "data": [user_public(u) for u in result.items],
        "pagination": meta,
    }


@router.get("/clubs")
def list_clubs(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_superadmin),
):
    data = []
    for club in clubs.all_clubs(db):
        summary = clubs.club_summary(db, club)
        summary["isActive"] = True
        data.append(summary)
    return {"success": True, "data": data}


@router.get("/dashboard")
def admin_dashboard(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_superadmin),
):
    return {"success": True, "data": dashboard.admin_dashboard(db)}


@router.get("/clubs/no-head")
def clubs_without_head(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_superadmin),
):
    return {"success": True, "data": [clubs.club_summary(db, c) for c in admin.clubs_without_head(db)]}


@router.put("/promote-club-head")
def promote_club_head(
    data: PromoteClubHead,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_superadmin),
):
    user = admin.promote_club_head(db, current_admin, data.user_id, data.club_id)
    commit(db)

    return {
        "success": True,
        "message": "User promoted to club head successfully",
        "data": {"userId": user.id, "newRole": user.role.value, "clubId": data.club_id},
    }


"""
사용자 권한 변경 API

- club_head : 기존 admin 자격을 모두 정리한 뒤 clubId 동아리의 회장으로 지정
- student   : 모든 동아리 admin 목록에서 제거

"""

@router.put("/users/{user_id}/role")
def set_role(
    user_id: str,
    data: RoleUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_superadmin),
):
    user = admin.set_role(db, current_admin, user_id, data.role, data.club_id)
    commit(db)

    return {
        "success": True,
        "message": f"User role updated to {user.role.value} successfully",
        "data": {"userId": user.id, "newRole": user.role.value, "clubId": data.club_id},
    }


@router.delete("/users/{user_id}")
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_superadmin),
):
    admin.delete_user(db, current_admin, user_id)
    commit(db)
    return {"success": True, "message": "User deleted successfully"}


@router.put("/clubs/{club_id}/assign-head")
def assign_head(
    club_id: str,
    data: AssignHead,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_superadmin),
):
    club = admin.assign_head(db, current_admin, club_id, data.user_id)
    commit(db)

    return {
        "success": True,
        "message": "Club head assigned successfully",
        "data": clubs.club_summary(db, club),
    }


@router.delete("/clubs/{club_id}")
def delete_club(
    club_id: str,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_superadmin),
):
    name = clubs.get_club(db, club_id).name
    removed = clubs.delete_club(db, current_admin, club_id, require_super_admin=True)
    commit(db)

    if not removed:
        return {
            "success": True,
            "message": "Seeded club deletion simulated successfully (seeded clubs cannot be permanently deleted)",
        }
    return {"success": True, "message": f'Club "{name}" deleted successfully'}


@router.get("/users/{user_id}/member-clubs")
def member_clubs(
    user_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_superadmin),
):
    return {"success": True, "data": [clubs.club_summary(db, c) for c in dashboard.member_clubs(db, user_id)]}


# 관리자 활동 로그 조회 엔드포인트
@router.get("/logs")
def list_admin_logs(
    limit: int = 50,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_superadmin),
):
    limit = max(1, min(limit, 200))

    Actor = aliased(User)
    Target = aliased(User)

    rows = db.execute(
        select(AdminActionLog, Actor, Target)
        .join(Actor, Actor.id == AdminActionLog.actor_id)
        .outerjoin(Target, Target.id == AdminActionLog.target_user_id)
        .order_by(desc(AdminActionLog.created_at), desc(AdminActionLog.id))
        .limit(limit)
    ).all()

    result = [
        {
            "id": log.id,
            "createdAt": isoformat(log.created_at),
            "action": log.action.value,
            "clubId": log.club_id,
            "requestId": log.target_request_id,
            "detail": log.detail,
            "actor": user_brief(actor),
            "target": user_brief(target) if target else {"_id": log.target_user_id} if log.target_user_id else None,
        }
        for log, actor, target in rows
    ]
    return {
        "success": True,
        "data": result,
        "meta": {"limit": limit, "count": len(result)},
    }
