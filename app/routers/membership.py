"""
membership.py

동아리 가입(Membership) API 모음.

이 파일은 가입 신청 / 탈퇴 / 가입 상태 조회와
동아리 관리자의 가입 요청 승인·거절, 회원 목록 / 회원 제외를 담당한다.

주요 기능:
- 가입 신청 (승인 필요 여부에 따라 즉시 가입 또는 pending 요청 생성)
- 탈퇴 (멱등)
- 가입 상태 조회 (NOT_MEMBER / PENDING / MEMBER / REJECTED)
- 가입 요청 목록 (대기 중 / 전체 + 상태 필터)
- 가입 요청 승인 / 거절
- 회원 목록 / 회원 제외

설계 원칙:
- 가입 신청 / 탈퇴는 토큰이 없으면 기본 시드 사용자로 동작
- 상태 조회와 관리자 기능은 토큰 필수 (없으면 401)
- 상태 전이 규칙은 app.services.membership 에 위임

관련 파일:
- app.services.membership  : 가입 상태 머신
- app.schemas.club         : JoinRequest / RejectRequest

"""

from typing import Literal

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_current_user_or_default, get_db
from app.db.session import commit
from app.models.club import RequestStatus
from app.models.user import User
from app.schemas.club import JoinRequest, RejectRequest
from app.services import clubs, membership
from app.services.serializers import request_public

router = APIRouter(prefix="/clubs", tags=["membership"])


"""
가입 신청 API

- 승인 불필요 동아리: 즉시 회원, requiresApproval=false
- 승인 필요 동아리: pending 요청 생성, requiresApproval=true + requestId

"""

@router.post("/{club_id}/join")
def join_club(
    club_id: str,
    data: JoinRequest | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_or_default),
):
    club = clubs.get_club(db, club_id)
    result = membership.request_join(db, club, user, data.message if data else None)
    commit(db)

    if result.requires_approval:
        return {
            "success": True,
            "message": "Membership request submitted successfully. Please wait for approval.",
            "requiresApproval": True,
            "requestId": result.request.id,
        }
    return {
        "success": True,
        "message": "Successfully joined club",
        "requiresApproval": False,
    }


@router.delete("/{club_id}/leave")
def leave_club(
    club_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user_or_default),
):
    club = clubs.get_club(db, club_id)
    membership.leave(db, club, user)
    commit(db)
    return {"success": True, "message": "Successfully left club"}


@router.get("/{club_id}/membership-status")
def membership_status(
    club_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    club = clubs.get_club(db, club_id)
    return {"success": True, "data": membership.membership_status(db, club, user).to_dict()}


@router.get("/{club_id}/membership-requests")
def pending_requests(
    club_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    club = clubs.get_club(db, club_id)
    membership.ensure_can_manage(club, user, "view membership requests")

    requests = membership.pending_requests(db, club)
    return {"success": True, "data": [request_public(r) for r in requests]}


@router.get("/{club_id}/all-membership-requests")
def all_requests(
    club_id: str,
    status: Literal["pending", "approved", "rejected", "all"] | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    club = clubs.get_club(db, club_id)
    membership.ensure_can_manage(club, user, "view membership requests")

    status_filter = RequestStatus(status) if status and status != "all" else None
    requests = membership.list_requests(db, club, status_filter)
    return {
        "success": True,
        "data": [request_public(r) for r in requests],
        "total": len(requests),
    }


@router.put("/{club_id}/membership-requests/{request_id}/accept")
def accept_request(
    club_id: str,
    request_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    club = clubs.get_club(db, club_id)
    req = membership.approve(db, club, request_id, user)
    commit(db)

    return {
        "success": True,
        "message": f"Membership request accepted. {req.user_first_name} {req.user_last_name} is now a member.",
        "data": request_public(req),
    }


@router.put("/{club_id}/membership-requests/{request_id}/reject")
def reject_request(
    club_id: str,
    request_id: str,
    data: RejectRequest | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    club = clubs.get_club(db, club_id)
    req = membership.reject(db, club, request_id, user, data.reason if data else None)
    commit(db)

    return {
        "success": True,
        "message": "Membership request rejected",
        "data": request_public(req),
    }


@router.get("/{club_id}/members")
def list_members(
    club_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    club = clubs.get_club(db, club_id)
    members = clubs.members_detail(db, club)
    return {"success": True, "data": members, "total": len(members)}


@router.delete("/{club_id}/members/{member_id}")
def remove_member(
    club_id: str,
    member_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    club = clubs.get_club(db, club_id)
    membership.remove_member(db, club, user, member_id)
    commit(db)
    return {"success": True, "message": "Member removed successfully"}
