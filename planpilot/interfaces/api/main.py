"""FastAPI 应用入口"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from planpilot.config import settings
from planpilot.infrastructure.database.engine import SessionLocal
from planpilot.infrastructure.database.schema import ensure_sqlite_schema
from planpilot.interfaces.api.container import ApiContainer
from planpilot.interfaces.api.routes import agents, auto_start, goals, health
from planpilot.interfaces.api.services.auto_start_registry import AutoStartRegistry
from planpilot.logging_config import configure_logging


def _create_session() -> Session:
    return SessionLocal()


def _build_container() -> ApiContainer:
    def transaction_manager(session: Session):
        from planpilot.infrastructure.database.transaction_manager import (
            SQLAlchemyTransactionManager,
        )

        return SQLAlchemyTransactionManager(session)

    def goal_repository(session: Session):
        from planpilot.infrastructure.database.repositories.goal_repository import (
            SQLAlchemyGoalRepository,
        )

        return SQLAlchemyGoalRepository(session)

    def plan_step_repository(session: Session):
        from planpilot.infrastructure.database.repositories.goal_repository import (
            SQLAlchemyPlanStepRepository,
        )

        return SQLAlchemyPlanStepRepository(session)

    def sub_task_repository(session: Session):
        from planpilot.infrastructure.database.repositories.goal_repository import (
            SQLAlchemySubTaskRepository,
        )

        return SQLAlchemySubTaskRepository(session)

    def research_repository(session: Session):
        from planpilot.infrastructure.database.repositories.agent_record_repository import (
            SQLAlchemyResearchRepository,
        )

        return SQLAlchemyResearchRepository(session)

    def execution_repository(session: Session):
        from planpilot.infrastructure.database.repositories.agent_record_repository import (
            SQLAlchemyExecutionRepository,
        )

        return SQLAlchemyExecutionRepository(session)

    def deployment_repository(session: Session):
        from planpilot.infrastructure.database.repositories.agent_record_repository import (
            SQLAlchemyDeploymentRepository,
        )

        return SQLAlchemyDeploymentRepository(session)

    return ApiContainer(
        session_factory=_create_session,
        transaction_manager=transaction_manager,
        goal_repository=goal_repository,
        plan_step_repository=plan_step_repository,
        sub_task_repository=sub_task_repository,
        research_repository=research_repository,
        execution_repository=execution_repository,
        deployment_repository=deployment_repository,
        agent_sleep=asyncio.sleep,
        runner_sleep=asyncio.sleep,
    )


def _get_display_host() -> str:
    """Return a host suitable for displaying in links."""
    if settings.host in {"0.0.0.0", "::"}:
        return "127.0.0.1"
    return settings.host


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings)
    display_host = _get_display_host()
    print(f"[*] {settings.app_name} v{settings.app_version} 启动中...")
    print(f"[ENV] 环境: {settings.env}")
    print(f"[DB] 数据库: {settings.database_url}")
    print(f"[URL] 服务地址: http://{display_host}:{settings.port}")
    print(f"[DOCS] API 文档: http://{display_host}:{settings.port}/docs")

    # 测试可以预先注入 container（以及自己的数据库）
    if getattr(app.state, "container", None) is None:
        try:
            ensure_sqlite_schema()
        except Exception as exc:  # pragma: no cover - best effort startup helper
            print(f"[DB] 数据库初始化失败: {exc}")
        app.state.container = _build_container()

    if getattr(app.state, "auto_start_registry", None) is None:
        app.state.auto_start_registry = AutoStartRegistry()

    try:
        yield
    finally:
        await app.state.auto_start_registry.shutdown()
        print(f"[SHUTDOWN] {settings.app_name} 关闭中...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="目标拆解与模拟 Agent 编排服务",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root() -> JSONResponse:
    display_host = _get_display_host()
    return JSONResponse(
        content={
            "message": f"欢迎使用 {settings.app_name}",
            "version": settings.app_version,
            "docs": f"http://{display_host}:{settings.port}/docs",
        }
    )


app.include_router(goals.router, prefix="/api")
app.include_router(agents.router, prefix="/api")
app.include_router(auto_start.router, prefix="/api")
app.include_router(health.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "planpilot.interfaces.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
