"""
errors.py

도메인 오류(Error) 정의 및 JSON 응답 변환 파일.

서비스 계층은 HTTP를 모르는 상태로 아래 예외만 발생시키고,
install_error_handlers()가 등록한 핸들러가
모든 오류를 공통 응답 형태 {success: false, message, ...} 로 변환한다.

오류 종류:
- ValidationError : 필수 값 누락 (400, 누락 필드 맵 포함)
- AuthError       : 잘못된 자격 증명 / 토큰 없음 (401)
- Forbidden       : 권한 또는 동아리 정책 위반 (403)
- NotFound        : 존재하지 않는 id (404)
- Conflict        : 중복 가입 / 이미 처리된 요청 (400)

관련 파일:
- app.main               : install_error_handlers 호출
- app.services.*         : 도메인 오류 발생

"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException


class ClubError(Exception):
    status_code = 500

    def __init__(self, message: str, **extra):
        super().__init__(message)
        self.message = message
        self.extra = extra


class ValidationError(ClubError):
    status_code = 400

    def __init__(self, message: str = "All fields are required", *, missing: dict[str, bool] | None = None):
        if missing is None:
            super().__init__(message)
        else:
            super().__init__(message, missing=missing)


class AuthError(ClubError):
    status_code = 401


class Forbidden(ClubError):
    status_code = 403


class NotFound(ClubError):
    status_code = 404


class Conflict(ClubError):
    status_code = 400


def require_fields(message: str = "All fields are required", **fields) -> None:
    """값이 비어 있는 필드가 하나라도 있으면 필드별 누락 여부 맵과 함께 ValidationError"""
    missing = {name: not value for name, value in fields.items()}
    if any(missing.values()):
        raise ValidationError(message, missing=missing)


def error_body(message: str, **extra) -> dict:
    return {"success": False, "message": message, **extra}


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ClubError)
    async def club_error_handler(request: Request, exc: ClubError):
        if exc.status_code >= 500:
            logger.error("{} {} failed: {}", request.method, request.url.path, exc.message)
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, **exc.extra),
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # 매칭되는 라우트가 없는 경우
        if exc.status_code == 404 and exc.detail == "Not Found":
            message = "Route not found"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content=error_body("Validation failed", errors=jsonable_encoder(exc.errors())),
        )
