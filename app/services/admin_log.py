"""
services/admin_log.py

감사 로그(admin_action_logs) 기록 서비스.

가입 요청 승인 / 거절, 권한 변경, 회장 지정,
동아리 설정 변경 / 삭제 등 관리 행위가 일어날 때
membership / clubs / admin 서비스가 이 함수를 호출한다.
조회는 /admin/logs 라우터에서 직접 수행한다.

설계 원칙:
- 같은 트랜잭션 안에서 flush 없이 add 만 수행
- 로그는 추가만 하고 수정 / 삭제하지 않음

"""

from sqlalchemy.orm import Session

from app.models.admin_log import AdminAction, AdminActionLog


"""
관리자 행위 로그 기록 함수

- actor_id          : 행위를 수행한 관리자 ID
- action            : 수행된 관리자 행위 유형
- club_id           : 대상 동아리 ID (선택)
- target_user_id    : 행위 대상 사용자 ID (선택)
- target_request_id : 대상 가입 요청 ID (선택)
- detail            : 부가 정보 (선택)

NOTE:
- db.commit()은 호출 측(라우터)에서 수행

"""
def write_admin_log(
    db: Session,
    *,
    actor_id: str,
    action: AdminAction,
    club_id=None,
    target_user_id=None,
    target_request_id=None,
    detail=None,
):
    log = AdminActionLog(
        actor_id=actor_id,
        action=action,
        club_id=club_id,
        target_user_id=target_user_id,
        target_request_id=target_request_id,
        detail=detail[:255] if detail else detail,
    )
    db.add(log)

