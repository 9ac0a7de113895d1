"""数据库引擎配置

- get_sync_engine(): 从配置读取 database_url 创建同步引擎
- SessionLocal: Session 工厂
- get_db_session(): FastAPI 依赖注入函数，请求结束后关闭 Session

SQLite 连接会开启 foreign_keys，使 ON DELETE CASCADE 生效。
"""

from collections.abc import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from planpilot.config import settings


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """为 SQLite 连接开启外键约束"""
    if engine.url.get_backend_name() != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_sync_engine(database_url: str | None = None) -> Engine:
    """创建同步数据库引擎

    配置说明：
    - echo: 调试模式下打印 SQL
    - check_same_thread: SQLite 连接允许跨线程使用（后台 auto-start 任务）
    """
    url = database_url or settings.database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}

    engine = create_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    enable_sqlite_foreign_keys(engine)
    return engine


# 全局同步引擎实例
sync_engine = get_sync_engine()

# 创建 Session 工厂
SessionLocal = sessionmaker(
    bind=sync_engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)


def get_db_session() -> Generator[Session, None, None]:
    """获取数据库会话（每个请求一个 Session，请求结束后关闭）

    Yields:
        Session: 数据库会话
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
