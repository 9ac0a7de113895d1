"""WorkflowRunner - "一键启动全部任务"

按 sequence_order 依次处理每个 Plan Step，对每个已启用阶段
（research → execution → deployment）调用对应的 Recorder。

状态机：
    idle → running(step, phase) → ... → idle
    stop() 随时可以发布 stopped，正在进行的 Recorder 调用不会被打断，
    取消令牌在下一个阶段边界生效。

阶段失败（Recorder 抛异常或返回 FAILED）记为 StepPhaseError，
记录日志后按 PhaseFailurePolicy 处理；下一个步骤总会继续执行。
失败的步骤之后不做步骤间暂停。

研究深度只决定查询文本，研究本身按默认深度（detailed）执行。
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from planpilot.application.services.deployment_recorder import DeploymentInput
from planpilot.application.services.execution_recorder import ExecutionInput
from planpilot.application.services.research_recorder import ResearchInput
from planpilot.config import settings
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.exceptions import StepPhaseError
from planpilot.domain.services.auto_task_inputs import (
    build_deployment_config,
    build_execution_instructions,
    build_research_query,
)
from planpilot.domain.value_objects.agent_domain import PHASE_ORDER, AgentDomain
from planpilot.domain.value_objects.auto_start_preferences import (
    AutoStartPreferences,
    PhaseFailurePolicy,
)
from planpilot.domain.value_objects.execution_type import ExecutionType

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[Any]]


class RunnerStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(frozen=True)
class RunnerState:
    """Workflow Runner 状态快照"""

    status: RunnerStatus = RunnerStatus.IDLE
    step_index: int | None = None
    step_id: str | None = None
    phase: AgentDomain | None = None
    stopped: bool = False
    started_step_ids: tuple[str, ...] = ()
    completed_step_ids: tuple[str, ...] = ()
    failed_step_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "step_index": self.step_index,
            "step_id": self.step_id,
            "phase": self.phase.value if self.phase else None,
            "stopped": self.stopped,
            "started_step_ids": list(self.started_step_ids),
            "completed_step_ids": list(self.completed_step_ids),
            "failed_step_ids": list(self.failed_step_ids),
        }


class CancellationToken:
    """协作式取消令牌，只在阶段边界检查"""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class WorkflowRunner:
    def __init__(
        self,
        research: Any,
        execution: Any,
        deployment: Any,
        *,
        sleep: SleepFn = asyncio.sleep,
        on_transition: Callable[[RunnerState], None] | None = None,
        pause_between_steps_seconds: float | None = None,
    ) -> None:
        self._recorders = {
            AgentDomain.RESEARCH: research,
            AgentDomain.EXECUTION: execution,
            AgentDomain.DEPLOYMENT: deployment,
        }
        self._sleep = sleep
        self._on_transition = on_transition
        self._pause_seconds = (
            settings.pause_between_steps_seconds
            if pause_between_steps_seconds is None
            else pause_between_steps_seconds
        )
        self._state = RunnerState()
        self._token: CancellationToken | None = None

    @property
    def state(self) -> RunnerState:
        return self._state

    def _publish(self, state: RunnerState) -> None:
        self._state = state
        if self._on_transition is not None:
            self._on_transition(state)

    def stop(self) -> None:
        """请求停止：立即发布 stopped，当前阶段结束后不再开始新阶段

        未在运行时只标记 stopped，状态保持 idle。
        """
        if self._token is None:
            self._publish(replace(self._state, status=RunnerStatus.IDLE, stopped=True))
            return
        self._token.cancel()
        self._publish(
            replace(self._state, status=RunnerStatus.STOPPED, phase=None, stopped=True)
        )

    async def run(
        self,
        steps: Sequence[PlanStep],
        preferences: AutoStartPreferences,
        cancel_token: CancellationToken | None = None,
    ) -> RunnerState:
        token = cancel_token or CancellationToken()
        self._token = token

        self._publish(
            RunnerState(
                status=RunnerStatus.RUNNING,
                started_step_ids=tuple(step.id for step in steps),
            )
        )
        logger.info("Auto-start workflow started with %d step(s)", len(steps))

        for index, step in enumerate(steps):
            if token.cancelled:
                break

            step_failed = await self._run_step(index, step, preferences, token)
            if token.cancelled:
                break

            if step_failed:
                self._publish(
                    replace(self._state, failed_step_ids=self._state.failed_step_ids + (step.id,))
                )
            else:
                self._publish(
                    replace(
                        self._state,
                        completed_step_ids=self._state.completed_step_ids + (step.id,),
                    )
                )

            if not step_failed and preferences.pause_between_steps and index < len(steps) - 1:
                await self._sleep(self._pause_seconds)

        final = replace(
            self._state,
            status=RunnerStatus.IDLE,
            step_index=None,
            step_id=None,
            phase=None,
            stopped=token.cancelled,
        )
        self._publish(final)
        self._token = None
        logger.info(
            "Auto-start workflow finished: completed=%d failed=%d stopped=%s",
            len(final.completed_step_ids),
            len(final.failed_step_ids),
            final.stopped,
        )
        return final

    async def _run_step(
        self,
        index: int,
        step: PlanStep,
        preferences: AutoStartPreferences,
        token: CancellationToken,
    ) -> bool:
        step_failed = False
        execution_request_id: str | None = None

        for phase in PHASE_ORDER:
            if not self._enabled(phase, preferences):
                continue
            if token.cancelled:
                break

            self._publish(
                replace(
                    self._state,
                    status=RunnerStatus.RUNNING,
                    step_index=index,
                    step_id=step.id,
                    phase=phase,
                )
            )
            logger.info("Step %d (%s): %s phase", index + 1, step.title, phase.value)

            phase_failed = False
            try:
                outcome = await self._invoke(phase, step, preferences, execution_request_id)
                if outcome.failed:
                    raise StepPhaseError(step.id, phase.value, outcome.error or "failed")
                if phase == AgentDomain.EXECUTION:
                    execution_request_id = outcome.request.id
            except Exception as exc:
                phase_failed = True
                logger.exception(
                    "Auto-start phase failed: step=%s phase=%s error=%s",
                    step.id,
                    phase.value,
                    exc,
                )

            await self._sleep(preferences.auto_progress_delay)

            if phase_failed:
                step_failed = True
                if preferences.phase_failure_policy == PhaseFailurePolicy.SKIP_STEP:
                    break

        return step_failed

    @staticmethod
    def _enabled(phase: AgentDomain, preferences: AutoStartPreferences) -> bool:
        if phase == AgentDomain.RESEARCH:
            return preferences.enable_research
        if phase == AgentDomain.EXECUTION:
            return preferences.enable_execution
        return preferences.enable_deployment

    async def _invoke(
        self,
        phase: AgentDomain,
        step: PlanStep,
        preferences: AutoStartPreferences,
        execution_request_id: str | None,
    ) -> Any:
        recorder = self._recorders[phase]

        if phase == AgentDomain.RESEARCH:
            payload: Any = ResearchInput(
                query=build_research_query(step, preferences.research_depth)
            )
        elif phase == AgentDomain.EXECUTION:
            payload = ExecutionInput(
                execution_type=ExecutionType.CODE_GENERATION,
                instructions=build_execution_instructions(step, preferences.execution_mode),
            )
        else:
            payload = DeploymentInput(
                deployment_type=preferences.deployment_provider,
                configuration=build_deployment_config(step, preferences.deployment_provider),
                execution_request_id=execution_request_id,
            )

        return await recorder.run(step.id, payload)
