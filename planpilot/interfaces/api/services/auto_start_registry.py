"""AutoStartRegistry - 每个 Goal 至多一个后台 auto-start 运行

职责：
- start(): 以 asyncio 任务启动 runner，并记录其最新状态快照
- state(): 查询某个 Goal 的最新状态
- stop(): 请求停止（runner 在下一个阶段边界结束）
- shutdown(): 应用关闭时先协作式停止，宽限期后再取消仍未结束的任务

已结束的运行保留 retention_seconds 秒供状态查询，之后在下一次 start() 时清理。
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from planpilot.application.services.workflow_runner import (
    CancellationToken,
    RunnerState,
    RunnerStatus,
    WorkflowRunner,
)
from planpilot.config import settings
from planpilot.domain.exceptions import DomainError

logger = logging.getLogger(__name__)


class AutoStartConflictError(DomainError):
    """同一个 Goal 已有运行中的 auto-start"""

    def __init__(self, goal_id: str):
        self.goal_id = goal_id
        super().__init__(f"Goal {goal_id} 的自动任务已在运行")


@dataclass
class AutoRun:
    token: CancellationToken
    runner: WorkflowRunner | None = None
    state: RunnerState = field(default_factory=RunnerState)
    task: asyncio.Task | None = None
    finished_at: float | None = None

    def record(self, state: RunnerState) -> None:
        self.state = state

    @property
    def active(self) -> bool:
        return self.task is not None and not self.task.done()


class AutoStartRegistry:
    def __init__(
        self,
        *,
        retention_seconds: float | None = None,
        shutdown_grace_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._runs: dict[str, AutoRun] = {}
        self._retention_seconds = (
            settings.auto_start_retention_seconds
            if retention_seconds is None
            else retention_seconds
        )
        self._shutdown_grace_seconds = (
            settings.auto_start_shutdown_grace_seconds
            if shutdown_grace_seconds is None
            else shutdown_grace_seconds
        )
        self._clock = clock

    def start(
        self,
        goal_id: str,
        runner_factory: Callable[[Callable[[RunnerState], None]], WorkflowRunner],
        run: Callable[[WorkflowRunner, CancellationToken], Awaitable[RunnerState]],
    ) -> RunnerState:
        """启动后台运行

        参数：
            runner_factory: 接收 on_transition 回调，返回 WorkflowRunner
            run: 执行 runner 的协程函数（负责 Session 生命周期）

        抛出：
            AutoStartConflictError: 该 Goal 已有运行中的任务
        """
        current = self._runs.get(goal_id)
        if current is not None and current.active:
            raise AutoStartConflictError(goal_id)

        self._prune_finished()

        entry = AutoRun(token=CancellationToken())
        entry.runner = runner_factory(entry.record)
        entry.state = RunnerState(status=RunnerStatus.RUNNING)
        entry.task = asyncio.create_task(
            self._guard(goal_id, entry, run(entry.runner, entry.token))
        )
        self._runs[goal_id] = entry
        return entry.state

    async def _guard(self, goal_id: str, entry: AutoRun, coro: Awaitable[RunnerState]) -> None:
        try:
            await coro
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Auto-start run for goal %s crashed", goal_id)
            entry.state = RunnerState(
                status=RunnerStatus.IDLE,
                stopped=True,
                started_step_ids=entry.state.started_step_ids,
                completed_step_ids=entry.state.completed_step_ids,
                failed_step_ids=entry.state.failed_step_ids,
            )
        finally:
            entry.finished_at = self._clock()

    def _prune_finished(self) -> None:
        now = self._clock()
        expired = [
            goal_id
            for goal_id, entry in self._runs.items()
            if entry.finished_at is not None
            and now - entry.finished_at >= self._retention_seconds
        ]
        for goal_id in expired:
            del self._runs[goal_id]

    def state(self, goal_id: str) -> RunnerState | None:
        entry = self._runs.get(goal_id)
        return entry.state if entry is not None else None

    def stop(self, goal_id: str) -> RunnerState | None:
        entry = self._runs.get(goal_id)
        if entry is None:
            return None
        if entry.active:
            entry.token.cancel()
            if entry.runner is not None:
                entry.runner.stop()
        return entry.state

    async def shutdown(self) -> None:
        tasks = [entry.task for entry in self._runs.values() if entry.active]
        for entry in self._runs.values():
            entry.token.cancel()

        if tasks:
            _, pending = await asyncio.wait(tasks, timeout=self._shutdown_grace_seconds)
            if pending:
                logger.warning("Cancelling %d auto-start run(s) at shutdown", len(pending))
            for task in pending:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
        self._runs.clear()
