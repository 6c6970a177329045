"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

이 파일은 .env 환경 변수들을 Pydantic BaseSettings를 통해 로드하여
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 상태 저장소(인메모리 SQLite) 연결 정보
- 서버 바인딩 주소 / 포트 (PORT 환경 변수, 기본 5000)
- 로그 레벨
- 토큰 미인증 요청 시 사용하는 기본(fallback) 사용자
- 페이지네이션 기본값
- CORS 허용 도메인 목록

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- 로컬 / 테스트 환경을 .env로 분리하여 관리
- 설정 값은 런타임 중 변경되지 않는 불변 객체로 취급

관련 파일:
- app.main               : CORS / 로깅 / 라우터 prefix 설정 사용
- app.db.session         : DATABASE_URL 사용
- app.core.deps          : DEFAULT_USER_ID 사용

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

# .env 파일에 정의된 환경 변수를 로드하는 설정 클래스
# extra="ignore" 옵션으로 정의되지 않은 환경 변수는 무시
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Campus Club Backend"

    # 기본값은 프로세스 메모리 안의 SQLite -> 재시작하면 시드 데이터로 초기화
    DATABASE_URL: str = "sqlite+pysqlite:///:memory:"

    API_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    LOG_LEVEL: str = "INFO"

    SEED_DEMO_DATA: bool = True

    # 토큰 없이 들어온 요청이 사용할 기본 사용자 (시드 student 계정)
    DEFAULT_USER_ID: str = "user3"

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # 발급되는 opaque 토큰 접두사 (만료 없음)
    TOKEN_PREFIX: str = "demo-token"

    # CORS 허용 도메인 (프론트엔드 주소)
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:3001"]

# 애플리케이션 전역에서 import하여 사용하는 Settings 인스턴스
# 실행 시 한 번만 생성됨
settings = Settings()
