"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

이 파일은 서버 실행 시 가장 먼저 로드되며,
애플리케이션 전반의 설정과 라우터 등록을 담당한다.

주요 역할:
- FastAPI 앱 인스턴스 생성
- 시작 시(lifespan) 로깅 설정, 스키마 생성, 시드 데이터 적재
- CORS / 요청 로깅 미들웨어 설정
- 요청 직렬화 미들웨어 (한 번에 하나의 요청만 상태 저장소에 접근)
- 도메인 오류 → 공통 응답 형태 변환 핸들러 등록
- 각 도메인별 라우터(auth, clubs, membership, events 등)를 API_PREFIX 아래에 등록
- 헬스 체크 엔드포인트 제공

설계 원칙:
- 비즈니스 로직은 포함하지 않고 설정/조립 역할만 수행
- 실제 기능은 routers / services 계층에 위임
- 상태는 프로세스 메모리에만 존재 (재시작 시 시드 상태로 초기화)

관련 파일:
- app.core.config        : 환경 변수 및 설정 로드
- app.core.errors        : 오류 핸들러
- app.db.seed            : 시드 데이터
- app.routers.*          : 기능별 API 라우터

"""

import asyncio
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.core.config import settings
from app.core.errors import install_error_handlers
from app.core.logging import setup_logging
from app.db.base import utcnow
from app.db.seed import seed_demo_data
from app.db.session import SessionLocal, commit, engine, init_schema
from app.routers import admin, announcements, auth, categories, clubs, dashboard, events, membership


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    # 이벤트 루프마다 새로 만들어야 하므로 시작 시 생성
    app.state.request_lock = asyncio.Lock()
    init_schema(engine)

    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_demo_data(db)
            commit(db)
        finally:
            db.close()

    logger.info(f"{settings.APP_NAME} ready (API prefix {settings.API_PREFIX})")
    yield
    logger.info(f"{settings.APP_NAME} shutting down")


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)


# 요청 로깅 (method / path / status / 처리 시간)
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.1f}ms)")
    return response


"""
요청 직렬화 미들웨어

- 모든 세션이 메모리 DB 커넥션 하나를 공유하므로
  요청 하나가 끝나기 전(의존성 정리 포함)에는 다음 요청을 실행하지 않음
- 대기는 이벤트 루프에서 이루어지므로 스레드풀을 점유하지 않음

"""
class SerializeRequestsMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async with scope["app"].state.request_lock:
            await self.app(scope, receive, send)


# 가장 바깥쪽 미들웨어로 등록
app.add_middleware(SerializeRequestsMiddleware)


for module in (auth, categories, clubs, membership, events, announcements, dashboard, admin):
    app.include_router(module.router, prefix=settings.API_PREFIX)


"""
서버 헬스 체크 엔드포인트

- 애플리케이션 프로세스가 정상 동작 중인지 확인
- 배포 환경에서 서버 상태 확인 용도

"""
@app.get(f"{settings.API_PREFIX}/health")
def health():
    return {"success": True, "message": "Server is running", "timestamp": utcnow().isoformat()}
