"""
auth.py

인증(Authentication) API 모음.

이 파일은 회원 가입, 로그인, 현재 사용자 조회를 담당한다.
토큰은 구조 없는 opaque 문자열이며 만료되지 않는다.

주요 기능:
- 회원 가입 (같은 이메일 재가입 시 기존 가입 정보 덮어쓰기)
- 로그인 (가입 사용자 → 시드 사용자 순서로 매칭) 및 토큰 발급
- 현재 사용자 조회

설계 원칙:
- 토큰은 Authorization: Bearer <token> 헤더로 전달
- 검증 / 매칭 규칙은 app.services.identity 에 위임
- 라우터는 commit 과 응답 형태 변환만 담당

관련 파일:
- app.services.identity    : 가입 / 로그인 / 토큰 해석
- app.core.deps            : 인증 의존성(get_current_user)
- app.schemas.auth         : 인증 관련 요청

"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_db
from app.db.session import commit
from app.models.user import User
from app.schemas.auth import LoginRequest, RegisterRequest
from app.services import identity
from app.services.serializers import user_public

router = APIRouter(prefix="/auth", tags=["auth"])


"""
회원 가입 API

- firstName / lastName / email / password 필수 (누락 시 필드별 누락 맵과 함께 400)
- role 미지정 시 student
- 가입 즉시 토큰 발급

"""

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    user, token = identity.register(
        db,
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        password=data.password,
        role=data.role,
    )
    commit(db)

    return {
        "success": True,
        "message": "Registration successful",
        "data": {"token": token, "user": user_public(user)},
    }


"""
로그인 API

- 가입 사용자는 비밀번호 일치 필요
- 시드 사용자는 이메일만으로 로그인
- 토큰은 응답 바디로 반환

"""

@router.post("/login")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    user, token = identity.login(db, email=data.email, password=data.password)
    commit(db)

    return {
        "success": True,
        "message": "Login successful",
        "data": {"token": token, "user": user_public(user)},
    }


@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return {"success": True, "data": user_public(user)}
