"""Pytest 配置文件 - 全局 fixtures"""

import asyncio

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from planpilot.infrastructure.database import models  # noqa: F401
from planpilot.infrastructure.database.base import Base
from planpilot.infrastructure.database.engine import enable_sqlite_foreign_keys


@pytest.fixture
def engine():
    """创建同步内存数据库引擎（开启外键，使级联删除生效）"""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    # 创建所有表
    Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=Session, expire_on_commit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    """创建同步数据库会话"""
    session = session_factory()
    yield session
    # 测试结束后回滚（保持数据库干净）
    session.rollback()
    session.close()


class SleepRecorder:
    """记录被请求的等待时长，不真正等待"""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)


@pytest.fixture
def fake_sleep() -> SleepRecorder:
    return SleepRecorder()
