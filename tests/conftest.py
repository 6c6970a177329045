import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.main import app as fastapi_app
from app.core.deps import get_db
from app.db.seed import seed_demo_data
from app.db.session import build_engine, init_schema


@pytest.fixture()
def engine():
    """테스트마다 새 메모리 DB (스키마 생성 + 시드 적재)"""
    engine = build_engine("sqlite+pysqlite:///:memory:")
    init_schema(engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        seed_demo_data(session)
        session.commit()
    finally:
        session.close()

    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    """테스트에서 직접 서비스 함수를 호출할 때 쓰는 세션"""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()
