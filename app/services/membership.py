"""
services/membership.py

동아리 가입(Membership) 상태 머신 비즈니스 로직 모음.

이 파일은 동아리 회원 집합(club_members)과
가입 요청(membership_requests)을 단독으로 소유하며,
가입 / 탈퇴 / 승인 / 거절 / 회원 제외 규칙을 한 곳에 집중한다.
다른 서비스는 회원 집합을 직접 수정하지 않고 이 파일의 함수를 호출한다.

(동아리, 사용자) 쌍의 상태:
- NOT_MEMBER : 초기 상태
- PENDING    : 승인 대기 중인 요청 존재
- MEMBER     : 회원 집합에 포함
- REJECTED   : 최근 요청이 거절됨 (재신청 가능)

주요 기능:
- 가입 신청 (승인 불필요 동아리는 즉시 가입, 필요 동아리는 pending 요청 생성)
- 가입 요청 승인 / 거절 (전체 관리자 또는 동아리 admin 만 가능)
- 가입 상태 조회 (저장하지 않고 매번 계산)
- 탈퇴 / 회원 제외 (멱등)

설계 원칙:
- HTTP / FastAPI 의존성 없음 (도메인 오류만 발생)
- 트랜잭션 제어(commit)는 라우터에서 수행
- 회원 수는 항상 회원 집합 크기로 계산 (저장 금지)
- 현재 상태는 "가장 최근 요청"으로만 판단 (별도 거절 목록을 두지 않음)

관련 파일:
- app.models.club          : Club / ClubMember / MembershipRequest 모델
- app.services.admin_log   : 승인/거절/제외 감사 로그
- app.routers.membership   : 가입 관련 API

"""

from dataclasses import asdict, dataclass
from enum import Enum

from loguru import logger
from sqlalchemy import delete, desc, func, select
from sqlalchemy.orm import Session

from app.core.errors import Conflict, Forbidden, NotFound
from app.db.base import utcnow
from app.models.admin_log import AdminAction
from app.models.club import Club, ClubMember, MembershipRequest, RequestStatus
from app.models.user import Role, User
from app.services.admin_log import write_admin_log


class MembershipState(str, Enum):
    NOT_MEMBER = "not_member"
    PENDING = "pending"
    MEMBER = "member"
    REJECTED = "rejected"


@dataclass
class MembershipStatus:
    state: MembershipState
    isMember: bool = False
    hasPendingRequest: bool = False
    wasRejected: bool = False
    canApply: bool = True
    lastRequestId: str | None = None
    lastRequestStatus: str | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["state"] = self.state.value
        return data


@dataclass
class JoinResult:
    requires_approval: bool
    request: MembershipRequest | None = None


# ---------------------------------------------------------------------------
# 회원 집합 조회 / 변경
# ---------------------------------------------------------------------------

def is_member(db: Session, club_id: str, user_id: str) -> bool:
    return db.get(ClubMember, (club_id, user_id)) is not None


def member_ids(db: Session, club_id: str) -> list[str]:
    return list(
        db.scalars(
            select(ClubMember.user_id).where(ClubMember.club_id == club_id).order_by(ClubMember.joined_at)
        ).all()
    )


def member_count(db: Session, club_id: str) -> int:
    return db.scalar(select(func.count()).select_from(ClubMember).where(ClubMember.club_id == club_id)) or 0


def member_rows(db: Session, club_id: str) -> list[ClubMember]:
    return list(
        db.scalars(select(ClubMember).where(ClubMember.club_id == club_id).order_by(ClubMember.joined_at)).all()
    )


def clubs_of_user(db: Session, user_id: str) -> list[str]:
    return list(db.scalars(select(ClubMember.club_id).where(ClubMember.user_id == user_id)).all())


def add_member(db: Session, club_id: str, user_id: str) -> None:
    if is_member(db, club_id, user_id):
        return
    db.add(ClubMember(club_id=club_id, user_id=user_id))
    db.flush()


def _discard_member(db: Session, club_id: str, user_id: str) -> bool:
    row = db.get(ClubMember, (club_id, user_id))
    if row is None:
        return False
    db.delete(row)
    db.flush()
    return True


def drop_club(db: Session, club_id: str) -> None:
    """동아리 삭제 시 회원 집합과 가입 요청을 함께 정리"""
    db.execute(delete(ClubMember).where(ClubMember.club_id == club_id))
    db.execute(delete(MembershipRequest).where(MembershipRequest.club_id == club_id))
    db.flush()


# ---------------------------------------------------------------------------
# 권한
# ---------------------------------------------------------------------------

def can_manage(club: Club, user: User) -> bool:
    return user.role == Role.SUPER_ADMIN or user.id in (club.admin_ids or [])


def ensure_can_manage(club: Club, user: User, action: str = "manage this club") -> None:
    if not can_manage(club, user):
        logger.warning(f"User {user.id} is not allowed to {action} for club {club.id}")
        raise Forbidden(f"Access denied. Only club admins can {action}.")


# ---------------------------------------------------------------------------
# 가입 요청 조회
# ---------------------------------------------------------------------------

def get_request(db: Session, club: Club, request_id: str) -> MembershipRequest:
    req = db.scalar(
        select(MembershipRequest).where(
            MembershipRequest.id == request_id,
            MembershipRequest.club_id == club.id,
        )
    )
    if not req:
        raise NotFound("Membership request not found")
    return req


def pending_request_for(db: Session, club_id: str, user_id: str) -> MembershipRequest | None:
    return db.scalar(
        select(MembershipRequest).where(
            MembershipRequest.club_id == club_id,
            MembershipRequest.user_id == user_id,
            MembershipRequest.status == RequestStatus.PENDING,
        )
    )


def latest_request(db: Session, club_id: str, user_id: str) -> MembershipRequest | None:
    # requested_at 내림차순, 같으면 나중에 들어온 요청 우선
    return db.scalar(
        select(MembershipRequest)
        .where(MembershipRequest.club_id == club_id, MembershipRequest.user_id == user_id)
        .order_by(desc(MembershipRequest.requested_at), desc(MembershipRequest.seq))
        .limit(1)
    )


def list_requests(db: Session, club: Club, status: RequestStatus | None = None) -> list[MembershipRequest]:
    stmt = select(MembershipRequest).where(MembershipRequest.club_id == club.id)
    if status is not None:
        stmt = stmt.where(MembershipRequest.status == status)
    stmt = stmt.order_by(desc(MembershipRequest.requested_at), desc(MembershipRequest.seq))
    return list(db.scalars(stmt).all())


def pending_requests(db: Session, club: Club) -> list[MembershipRequest]:
    return list_requests(db, club, RequestStatus.PENDING)


def count_pending(db: Session) -> int:
    return db.scalar(
        select(func.count()).select_from(MembershipRequest).where(MembershipRequest.status == RequestStatus.PENDING)
    ) or 0


# ---------------------------------------------------------------------------
# 상태 전이
# ---------------------------------------------------------------------------

"""
가입 신청

- 이미 회원이면 Conflict
- 승인 대기 요청이 있으면 Conflict
- 동아리가 가입을 받지 않으면(allowJoining=false) Forbidden
- requireApproval=false : 즉시 회원 집합에 추가, 요청 기록 없음
- requireApproval=true  : 요청자 신원 스냅샷과 메시지를 담은 pending 요청 생성

"""

def request_join(db: Session, club: Club, user: User, message: str | None = None) -> JoinResult:
    if is_member(db, club.id, user.id):
        raise Conflict("You are already a member of this club")

    if pending_request_for(db, club.id, user.id):
        raise Conflict("You already have a pending membership request for this club")

    if not club.allow_joining:
        raise Forbidden("This club is not currently accepting new members")

    if not club.require_approval:
        add_member(db, club.id, user.id)
        logger.info(f"User {user.first_name} {user.last_name} joined {club.name} directly")
        return JoinResult(requires_approval=False)

    req = MembershipRequest(
        club_id=club.id,
        user_id=user.id,
        user_first_name=user.first_name,
        user_last_name=user.last_name,
        user_email=user.email,
        user_role=user.role.value,
        status=RequestStatus.PENDING,
        message=message or "",
        requested_at=utcnow(),
    )
    db.add(req)
    db.flush()

    logger.info(f"Membership request created: {user.first_name} {user.last_name} -> {club.name} ({req.id})")
    return JoinResult(requires_approval=True, request=req)


def _decide(db: Session, club: Club, request_id: str, actor: User, action: str) -> MembershipRequest:
    ensure_can_manage(club, actor, f"{action} membership requests")

    req = get_request(db, club, request_id)
    if req.status != RequestStatus.PENDING:
        raise Conflict("This request has already been processed")
    return req


def approve(db: Session, club: Club, request_id: str, actor: User) -> MembershipRequest:
    req = _decide(db, club, request_id, actor, "accept")

    add_member(db, club.id, req.user_id)
    req.status = RequestStatus.APPROVED
    req.decided_at = utcnow()
    req.decided_by = actor.id

    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.APPROVE_REQUEST,
        club_id=club.id,
        target_user_id=req.user_id,
        target_request_id=req.id,
    )
    db.flush()

    logger.info(f"Accepted membership request: {req.user_first_name} {req.user_last_name} -> Club {club.id}")
    return req


def reject(db: Session, club: Club, request_id: str, actor: User, reason: str | None = None) -> MembershipRequest:
    req = _decide(db, club, request_id, actor, "reject")

    req.status = RequestStatus.REJECTED
    req.decided_at = utcnow()
    req.decided_by = actor.id
    req.rejection_reason = reason or ""

    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.REJECT_REQUEST,
        club_id=club.id,
        target_user_id=req.user_id,
        target_request_id=req.id,
        detail=reason or None,
    )
    db.flush()

    logger.info(
        f"Rejected membership request: {req.user_first_name} {req.user_last_name} -> Club {club.id} "
        f"(Reason: {reason or 'No reason provided'})"
    )
    return req


"""
가입 상태 조회 (저장하지 않고 매번 계산)

- 회원 집합에 있으면 MEMBER
- 없으면 가장 최근 요청 기준
  - 요청 없음 : NOT_MEMBER (신청 가능)
  - pending   : PENDING (신청 불가)
  - rejected  : REJECTED (재신청 가능)
  - approved  : MEMBER

"""

def membership_status(db: Session, club: Club, user: User) -> MembershipStatus:
    latest = latest_request(db, club.id, user.id)
    last_id = latest.id if latest else None
    last_status = latest.status.value if latest else None

    if is_member(db, club.id, user.id):
        return MembershipStatus(
            state=MembershipState.MEMBER,
            isMember=True,
            canApply=False,
            lastRequestId=last_id,
            lastRequestStatus=last_status,
        )

    if latest is None:
        return MembershipStatus(state=MembershipState.NOT_MEMBER)

    if latest.status == RequestStatus.PENDING:
        return MembershipStatus(
            state=MembershipState.PENDING,
            hasPendingRequest=True,
            canApply=False,
            lastRequestId=last_id,
            lastRequestStatus=last_status,
        )

    if latest.status == RequestStatus.REJECTED:
        return MembershipStatus(
            state=MembershipState.REJECTED,
            wasRejected=True,
            canApply=True,
            lastRequestId=last_id,
            lastRequestStatus=last_status,
        )

    return MembershipStatus(
        state=MembershipState.MEMBER,
        isMember=True,
        canApply=False,
        lastRequestId=last_id,
        lastRequestStatus=last_status,
    )


def leave(db: Session, club: Club, user: User) -> None:
    if _discard_member(db, club.id, user.id):
        logger.info(f"User {user.id} left club {club.id}")


def remove_member(db: Session, club: Club, actor: User, target_user_id: str) -> None:
    ensure_can_manage(club, actor, "remove members")

    removed = _discard_member(db, club.id, target_user_id)
    write_admin_log(
        db,
        actor_id=actor.id,
        action=AdminAction.REMOVE_MEMBER,
        club_id=club.id,
        target_user_id=target_user_id,
        detail=None if removed else "not a member",
    )
    db.flush()
    logger.info(f"Removing member {target_user_id} from club {club.id}")
