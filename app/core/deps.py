from typing import Generator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.errors import Forbidden
from app.db.session import SessionLocal
from app.models.user import Role, User
from app.services import identity

# Swagger Authorize에서 "Bearer 토큰" 입력받는 스키마
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_token(cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme)) -> str | None:
    return cred.credentials if cred else None


# 토큰 필수 (없거나 모르는 토큰이면 401)
def get_current_user(
    token: str | None = Depends(get_token),
    db: Session = Depends(get_db),
) -> User:
    return identity.resolve_token(db, token)


# 토큰이 없거나 유효하지 않으면 기본 시드 사용자
def get_current_user_or_default(
    token: str | None = Depends(get_token),
    db: Session = Depends(get_db),
) -> User:
    return identity.current_user_or_default(db, token)


# 허용 역할 중 하나가 아니면 403 (메시지는 허용 역할 이름으로 구성)
def require_role(*roles: Role):
    allowed = " or ".join(r.value.replace("_", " ") for r in roles)
    message = f"Access denied. {allowed.capitalize()} required."

    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise Forbidden(message)
        return current_user
    return _checker


get_current_superadmin = require_role(Role.SUPER_ADMIN)
