"""
security.py

비밀번호 해싱 및 접근 토큰 발급을 담당하는 보안 유틸리티 모음.

이 파일은 인증(identity) 로직에서 사용하는
저수준(low-level) 보안 기능만을 제공하며,
라우터나 비즈니스 로직은 포함하지 않는다.

주요 기능:
- 비밀번호 해싱 및 검증 (passlib)
- opaque 접근 토큰 생성

설계 원칙:
- 저장소에는 비밀번호 해시만 저장 (평문 저장 금지)
- 토큰은 구조 없는 랜덤 문자열, 만료/폐기 없음 (데모용 mock 백엔드)
- 토큰 → 사용자 매핑은 access_tokens 테이블에서 직접 조회

관련 파일:
- app.core.config        : TOKEN_PREFIX 설정
- app.services.identity  : 회원가입 / 로그인 / 토큰 해석

"""

import secrets

from passlib.context import CryptContext

from app.core.config import settings


# pbkdf2_sha256 기반 비밀번호 해싱 컨텍스트
# deprecated="auto"로 향후 알고리즘 교체 가능하도록 설정
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


"""
접근 토큰 생성 함수

- 로그인 / 회원가입 성공 시마다 새로 발급
- Authorization Header(Bearer)에 담겨 전달됨

"""

def create_access_token() -> str:
    return f"{settings.TOKEN_PREFIX}-{secrets.token_urlsafe(24)}"
