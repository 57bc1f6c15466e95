"""测试夹具：为 pytest 提供数据库、客户端与常用账号的共享配置。"""

import itertools
import os
from typing import Callable, Generator, Optional

TEST_DB_PATH = os.path.join(os.path.dirname(__file__), "test.db")
TEST_DATABASE_URL = f"sqlite:///{TEST_DB_PATH}"

# 必须在导入应用之前设置，配置对象会在首次导入时缓存
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["SESSION_BACKEND"] = "memory"
os.environ["ENVIRONMENT"] = "development"
os.environ.setdefault("LOG_DIR", os.path.join(os.path.dirname(__file__), "log"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from app.core.config import get_settings  # noqa: E402
from app.core.dependencies import get_db  # noqa: E402
from app.db import session as db_session  # noqa: E402
from app.db.init_db import init_db  # noqa: E402
from app.main import app  # noqa: E402

_sequence = itertools.count(1)


def next_sequence() -> int:
    """全局递增序号，用于生成互不冲突的邮箱、手机号与车牌。"""
    return next(_sequence)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database() -> Generator[None, None, None]:
    """创建隔离的 SQLite 测试数据库，并在会话结束后清理。"""
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db_session.engine = engine
    db_session.SessionLocal = TestingSessionLocal

    init_db()
    yield

    engine.dispose()
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture()
def db_session_fixture() -> Generator[Session, None, None]:
    """提供给测试用例使用的数据库会话。"""
    session = db_session.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db_session_fixture):
    """构建 FastAPI TestClient，并注入测试专用的数据库依赖。"""
    def override_get_db() -> Generator[Session, None, None]:
        session = db_session.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def coordinator_headers(client: TestClient) -> dict:
    """默认协调员的认证头。"""
    settings = get_settings()
    response = client.post(
        "/api/v1/auth/login",
        json={"email": settings.default_coordinator_email, "password": settings.default_coordinator_password},
    )
    assert response.status_code == 200, response.text
    return auth_headers(response.json()["data"]["access_token"])


@pytest.fixture()
def organization_id(client: TestClient, coordinator_headers: dict) -> int:
    response = client.post(
        "/api/v1/organizations",
        json={"name": f"AFAD Bölge {next_sequence()}", "org_type": "kamu"},
        headers=coordinator_headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]["id"]


@pytest.fixture()
def make_user(client: TestClient, coordinator_headers: dict) -> Callable[..., dict]:
    """注册一个新用户，必要时由协调员分配角色与机构。

    返回 ``{"id", "email", "phone", "password", "headers"}``。
    """

    def _make(role: Optional[str] = None, organization_id: Optional[int] = None, password: str = "secret123") -> dict:
        n = next_sequence()
        email = f"user{n}@example.com"
        phone = f"0532{n:07d}"
        response = client.post(
            "/api/v1/auth/register",
            json={"name": "Ayşe", "surname": f"Yılmaz{n}", "email": email, "password": password, "phone": phone},
        )
        assert response.status_code == 200, response.text
        data = response.json()["data"]
        user_id = data["user"]["id"]
        if role is not None:
            body = {"role": role}
            if organization_id is not None:
                body["organization_id"] = organization_id
            changed = client.put(f"/api/v1/users/{user_id}/role", json=body, headers=coordinator_headers)
            assert changed.status_code == 200, changed.text
        return {
            "id": user_id,
            "email": email,
            "phone": phone,
            "password": password,
            "headers": auth_headers(data["access_token"]),
        }

    return _make


@pytest.fixture()
def make_vehicle(client: TestClient) -> Callable[..., dict]:
    def _make(headers: dict, vehicle_type: str = "otomobil", capacity: int = 5, **extra) -> dict:
        body = {
            "plate": f"34 AFT {next_sequence():04d}",
            "vehicle_type": vehicle_type,
            "capacity": capacity,
            "usage_purpose": "yolcu",
            **extra,
        }
        response = client.post("/api/v1/vehicles", json=body, headers=headers)
        assert response.status_code == 200, response.text
        return response.json()["data"]

    return _make


@pytest.fixture()
def make_request(client: TestClient) -> Callable[..., dict]:
    def _make(headers: dict, vehicles: Optional[list] = None, **extra) -> dict:
        body = {
            "title": "Çadır kenti tahliyesi",
            "description": "Yaşlı ve engelli vatandaşların taşınması",
            "vehicles": vehicles or [{"vehicle_type": "otomobil", "count": 1}],
            "location": {"address": "Kahramanmaraş Merkez", "lat": 37.5753, "lng": 36.9228},
            **extra,
        }
        response = client.post("/api/v1/requests", json=body, headers=headers)
        assert response.status_code == 200, response.text
        return response.json()["data"]

    return _make
