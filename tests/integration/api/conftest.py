"""API 集成测试 fixtures

- 每个测试使用 tmp_path 下独立的 SQLite 文件数据库
- app.state.container 预先注入，lifespan 不再初始化默认数据库
- 模拟延迟替换为立即返回
"""

import asyncio
import time
from dataclasses import replace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from planpilot.infrastructure.database.base import Base
from planpilot.infrastructure.database.engine import enable_sqlite_foreign_keys, get_db_session
from planpilot.interfaces.api.main import _build_container, app
from planpilot.interfaces.api.services.auto_start_registry import AutoStartRegistry

USER_HEADERS = {"X-User-Id": "user-1"}
OTHER_USER_HEADERS = {"X-User-Id": "user-2"}


async def fast_sleep(_seconds: float) -> None:
    await asyncio.sleep(0)


@pytest.fixture
def api_session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'planpilot_test.db'}",
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)

    yield sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

    engine.dispose()


@pytest.fixture
def client(api_session_factory):
    def override_get_db_session():
        session = api_session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.state.container = replace(
        _build_container(),
        session_factory=api_session_factory,
        agent_sleep=fast_sleep,
        runner_sleep=fast_sleep,
    )
    app.state.auto_start_registry = AutoStartRegistry()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    app.state.container = None
    app.state.auto_start_registry = None


@pytest.fixture
def created_goal(client) -> dict:
    response = client.post(
        "/api/goals", json={"goal": "Plan a trip to Japan"}, headers=USER_HEADERS
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def wait_until_idle(client):
    """轮询 auto-start 状态直到 runner 回到 idle"""

    def wait(goal_id: str, timeout: float = 5.0) -> dict:
        deadline = time.monotonic() + timeout
        while True:
            state = client.get(f"/api/goals/{goal_id}/auto-start", headers=USER_HEADERS).json()
            if state["status"] == "idle" or time.monotonic() > deadline:
                return state
            time.sleep(0.02)

    return wait
