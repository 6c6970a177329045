"""
services/identity.py

신원(Identity) 저장소 비즈니스 로직 모음.

이 파일은 회원가입, 로그인, 토큰 → 사용자 해석 등
사용자 신원 관련 규칙을 담당한다.
라우터는 이 파일의 함수를 호출하여 결과만 응답으로 변환한다.

주요 기능:
- 회원가입 (같은 이메일 재가입 시 기존 가입 정보 덮어쓰기)
- 로그인 (가입 사용자 우선, 없으면 시드 사용자 이메일 매칭)
- 토큰 해석 / 토큰 없는 요청의 기본 사용자 해석
- 가입 사용자 / 시드 사용자 통합 조회

설계 원칙:
- HTTP / FastAPI 의존성 없음 (도메인 오류만 발생)
- 트랜잭션 제어(commit)는 라우터에서 수행
- 토큰은 만료 / 폐기 없음, 알 수 없는 토큰으로 세션을 만들어 주지 않음

관련 파일:
- app.models.user        : User / Role / AccessToken 모델
- app.core.security      : 비밀번호 해시 / 토큰 생성
- app.routers.auth       : 인증 API

"""

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AuthError, NotFound, require_fields
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models.user import AccessToken, Role, User


def find_user(db: Session, user_id: str | None) -> User | None:
    if not user_id:
        return None
    return db.get(User, user_id)


def get_user(db: Session, user_id: str) -> User:
    user = find_user(db, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def find_registered_user(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email, User.is_seeded.is_(False)))


def find_seeded_user(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email, User.is_seeded.is_(True)).order_by(User.id))


def count_users(db: Session, *, seeded: bool | None = None) -> int:
    stmt = select(func.count()).select_from(User)
    if seeded is not None:
        stmt = stmt.where(User.is_seeded.is_(seeded))
    return db.scalar(stmt) or 0


def issue_token(db: Session, user: User) -> str:
    token = create_access_token()
    db.add(AccessToken(token=token, user_id=user.id))
    db.flush()
    return token


"""
회원가입

- firstName / lastName / email / password 중 하나라도 없으면 ValidationError
- role 미지정 시 student
- 같은 이메일로 가입한 기록이 있으면 덮어쓴다 (id는 유지)
- 성공 시 새 토큰 발급

"""

def register(
    db: Session,
    *,
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    password: str | None,
    role: Role | None = None,
) -> tuple[User, str]:
    require_fields(firstName=first_name, lastName=last_name, email=email, password=password)

    user = find_registered_user(db, email)
    if user:
        logger.info(f"Re-registration overwrites existing account: {email}")
        user.first_name = first_name
        user.last_name = last_name
        user.password_hash = get_password_hash(password)
        user.role = role or Role.STUDENT
    else:
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=get_password_hash(password),
            role=role or Role.STUDENT,
            is_seeded=False,
        )
        db.add(user)
    db.flush()

    token = issue_token(db, user)
    logger.info(f"Registration successful for: {email} ({user.role.value})")
    return user, token


"""
로그인

- 가입 사용자 우선: 비밀번호가 정확히 일치해야 함
- 가입 기록이 없으면 시드 사용자를 이메일만으로 매칭 (비밀번호 검사 없음)
- 둘 다 없으면 AuthError

"""

def login(db: Session, *, email: str | None, password: str | None) -> tuple[User, str]:
    require_fields("Email and password are required", email=email, password=password)

    registered = find_registered_user(db, email)
    if registered:
        if not registered.password_hash or not verify_password(password, registered.password_hash):
            logger.warning(f"Password mismatch for registered user: {email}")
            raise AuthError("Invalid password")
        user = registered
        method = "registered"
    else:
        user = find_seeded_user(db, email)
        if not user:
            logger.warning(f"Login failed, no registered or seeded user: {email}")
            raise AuthError("Invalid email or password. Please register first.")
        method = "seeded"

    token = issue_token(db, user)
    logger.info(f"Login successful for: {user.first_name} {user.last_name} ({user.email}) via {method}")
    return user, token


def resolve_token(db: Session, token: str | None) -> User:
    if not token:
        raise AuthError("No token provided")

    row = db.get(AccessToken, token)
    user = find_user(db, row.user_id) if row else None
    if not user:
        raise AuthError("Invalid token")
    return user


def default_user(db: Session) -> User:
    user = find_user(db, settings.DEFAULT_USER_ID)
    if not user:
        # 시드 데이터 없이 기동한 경우
        raise AuthError("Authentication required")
    return user


def current_user_or_default(db: Session, token: str | None) -> User:
    """토큰이 있고 유효하면 그 사용자, 아니면 기본 시드 사용자"""
    if token:
        row = db.get(AccessToken, token)
        user = find_user(db, row.user_id) if row else None
        if user:
            return user
    return default_user(db)
