"""测试：WorkflowRunner（一键启动全部任务）

Recorder 使用 AsyncMock，记录调用顺序；sleep 使用记录器。
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from planpilot.application.services.agent_recorder import AgentOutcome, AgentOutcomeKind
from planpilot.application.services.workflow_runner import (
    CancellationToken,
    RunnerState,
    RunnerStatus,
    WorkflowRunner,
)
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.value_objects.agent_domain import AgentDomain
from planpilot.domain.value_objects.auto_start_preferences import (
    AutoStartPreferences,
    ExecutionMode,
    PhaseFailurePolicy,
    ResearchDepth,
)
from planpilot.domain.value_objects.deployment_type import DeploymentType


def _outcome(kind: AgentOutcomeKind = AgentOutcomeKind.OK, request_id: str = "req") -> AgentOutcome:
    return AgentOutcome(
        kind=kind,
        request=SimpleNamespace(id=request_id),
        error="boom" if kind == AgentOutcomeKind.FAILED else None,
    )


class CallLog:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, object]] = []

    def recorder(self, phase: str, outcome: AgentOutcome | None = None) -> AsyncMock:
        async def run(plan_id, payload):
            self.calls.append((phase, plan_id, payload))
            return outcome or _outcome(request_id=f"{phase}-{plan_id}")

        return AsyncMock(run=AsyncMock(side_effect=run))


@pytest.fixture
def steps() -> list[PlanStep]:
    return [
        PlanStep.create("goal-1", "Foundation & Prerequisites", "Basics", 1),
        PlanStep.create("goal-1", "Structured Learning Path", "Curriculum", 2),
    ]


@pytest.fixture
def log() -> CallLog:
    return CallLog()


def _runner(log, fake_sleep, *, research=None, execution=None, deployment=None, **kwargs):
    return WorkflowRunner(
        research or log.recorder("research"),
        execution or log.recorder("execution"),
        deployment or log.recorder("deployment"),
        sleep=fake_sleep,
        pause_between_steps_seconds=2.0,
        **kwargs,
    )


class TestPhaseOrdering:
    @pytest.mark.asyncio
    async def test_steps_and_phases_run_in_order(self, log, fake_sleep, steps):
        runner = _runner(log, fake_sleep)

        final = await runner.run(steps, AutoStartPreferences(enable_deployment=True))

        assert [(phase, plan_id) for phase, plan_id, _ in log.calls] == [
            ("research", steps[0].id),
            ("execution", steps[0].id),
            ("deployment", steps[0].id),
            ("research", steps[1].id),
            ("execution", steps[1].id),
            ("deployment", steps[1].id),
        ]
        assert final.status == RunnerStatus.IDLE
        assert final.stopped is False
        assert final.completed_step_ids == (steps[0].id, steps[1].id)
        assert final.failed_step_ids == ()

    @pytest.mark.asyncio
    async def test_disabled_phases_are_skipped(self, log, fake_sleep, steps):
        runner = _runner(log, fake_sleep)

        await runner.run(
            steps,
            AutoStartPreferences(
                enable_research=False, auto_progress_delay=1.0, pause_between_steps=False
            ),
        )

        assert [phase for phase, _, _ in log.calls] == ["execution", "execution"]
        assert fake_sleep.calls == [1.0, 1.0]

    @pytest.mark.asyncio
    async def test_payloads_follow_preferences(self, log, fake_sleep, steps):
        runner = _runner(log, fake_sleep)
        preferences = AutoStartPreferences(
            enable_deployment=True,
            research_depth=ResearchDepth.BASIC,
            execution_mode=ExecutionMode.CONSERVATIVE,
            deployment_provider=DeploymentType.GITHUB_PAGES,
        )

        await runner.run(steps[:1], preferences)

        research, execution, deployment = (payload for _, _, payload in log.calls)
        assert research.query.startswith("Quick overview: Foundation & Prerequisites")
        # 深度只影响查询文本
        assert research.depth == ResearchDepth.DETAILED
        assert execution.instructions.endswith("minimal dependencies.")
        assert deployment.deployment_type == DeploymentType.GITHUB_PAGES
        assert deployment.configuration == {
            "username": "auto-user",
            "repository": "foundation---prerequisites",
        }
        assert deployment.execution_request_id == f"execution-{steps[0].id}"


class TestPacing:
    @pytest.mark.asyncio
    async def test_delay_after_each_phase_and_pause_between_steps(self, log, fake_sleep, steps):
        runner = _runner(log, fake_sleep)

        await runner.run(steps, AutoStartPreferences(auto_progress_delay=0.5))

        assert fake_sleep.calls == [0.5, 0.5, 2.0, 0.5, 0.5]

    @pytest.mark.asyncio
    async def test_no_pause_when_disabled(self, log, fake_sleep, steps):
        runner = _runner(log, fake_sleep)

        await runner.run(
            steps, AutoStartPreferences(auto_progress_delay=0.5, pause_between_steps=False)
        )

        assert fake_sleep.calls == [0.5, 0.5, 0.5, 0.5]

    @pytest.mark.asyncio
    async def test_no_pause_after_failed_step(self, log, fake_sleep, steps):
        research = AsyncMock()
        research.run.side_effect = [RuntimeError("network"), _outcome()]
        runner = _runner(log, fake_sleep, research=research)

        final = await runner.run(steps, AutoStartPreferences(auto_progress_delay=0.5))

        assert final.failed_step_ids == (steps[0].id,)
        assert fake_sleep.calls == [0.5, 0.5, 0.5]


class TestPhaseFailures:
    @pytest.mark.asyncio
    async def test_skip_step_policy(self, log, fake_sleep, steps):
        research = AsyncMock()
        research.run.side_effect = [RuntimeError("network"), _outcome()]
        runner = _runner(log, fake_sleep, research=research)

        final = await runner.run(
            steps, AutoStartPreferences(auto_progress_delay=0.5, pause_between_steps=False)
        )

        assert [(phase, plan_id) for phase, plan_id, _ in log.calls] == [
            ("execution", steps[1].id)
        ]
        assert final.failed_step_ids == (steps[0].id,)
        assert final.completed_step_ids == (steps[1].id,)
        # 失败的阶段之后同样等待
        assert fake_sleep.calls == [0.5, 0.5, 0.5]

    @pytest.mark.asyncio
    async def test_continue_step_policy(self, log, fake_sleep, steps):
        research = AsyncMock()
        research.run.side_effect = [RuntimeError("network"), _outcome()]
        runner = _runner(log, fake_sleep, research=research)

        final = await runner.run(
            steps,
            AutoStartPreferences(phase_failure_policy=PhaseFailurePolicy.CONTINUE_STEP),
        )

        assert [plan_id for _, plan_id, _ in log.calls] == [steps[0].id, steps[1].id]
        assert final.failed_step_ids == (steps[0].id,)

    @pytest.mark.asyncio
    async def test_failed_outcome_is_a_phase_failure(self, log, fake_sleep, steps):
        execution = log.recorder("execution", _outcome(AgentOutcomeKind.FAILED))
        runner = _runner(log, fake_sleep, execution=execution)

        final = await runner.run(steps, AutoStartPreferences(enable_deployment=True))

        assert "deployment" not in [phase for phase, _, _ in log.calls]
        assert final.failed_step_ids == (steps[0].id, steps[1].id)

    @pytest.mark.asyncio
    async def test_degraded_outcome_is_not_a_failure(self, log, fake_sleep, steps):
        research = log.recorder("research", _outcome(AgentOutcomeKind.DEGRADED))
        runner = _runner(log, fake_sleep, research=research)

        final = await runner.run(steps, AutoStartPreferences())

        assert final.failed_step_ids == ()
        assert len(final.completed_step_ids) == 2


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancel_takes_effect_at_next_phase_boundary(self, log, fake_sleep, steps):
        token = CancellationToken()

        async def research_then_cancel(plan_id, payload):
            log.calls.append(("research", plan_id, payload))
            token.cancel()
            return _outcome()

        research = AsyncMock(run=AsyncMock(side_effect=research_then_cancel))
        runner = _runner(log, fake_sleep, research=research)

        final = await runner.run(steps, AutoStartPreferences(), cancel_token=token)

        assert [phase for phase, _, _ in log.calls] == ["research"]
        assert final.status == RunnerStatus.IDLE
        assert final.stopped is True
        assert final.completed_step_ids == ()

    @pytest.mark.asyncio
    async def test_already_cancelled_token_runs_nothing(self, log, fake_sleep, steps):
        token = CancellationToken()
        token.cancel()
        runner = _runner(log, fake_sleep)

        final = await runner.run(steps, AutoStartPreferences(), cancel_token=token)

        assert log.calls == []
        assert final.stopped is True

    @pytest.mark.asyncio
    async def test_stop_publishes_stopped_state(self, log, fake_sleep, steps):
        published: list[RunnerState] = []
        runner_holder: dict[str, WorkflowRunner] = {}

        async def research_then_stop(plan_id, payload):
            log.calls.append(("research", plan_id, payload))
            runner_holder["runner"].stop()
            return _outcome()

        research = AsyncMock(run=AsyncMock(side_effect=research_then_stop))
        runner = _runner(log, fake_sleep, research=research, on_transition=published.append)
        runner_holder["runner"] = runner

        final = await runner.run(steps, AutoStartPreferences())

        assert any(state.status == RunnerStatus.STOPPED for state in published)
        assert published[-1] == final
        assert final.status == RunnerStatus.IDLE
        assert final.stopped is True

    def test_stop_while_idle_stays_idle(self, log, fake_sleep):
        published: list[RunnerState] = []
        runner = _runner(log, fake_sleep, on_transition=published.append)

        runner.stop()

        assert runner.state.status == RunnerStatus.IDLE
        assert runner.state.stopped is True
        assert published == [runner.state]


class TestPublishedStates:
    @pytest.mark.asyncio
    async def test_transitions_report_current_step_and_phase(self, log, fake_sleep, steps):
        published: list[RunnerState] = []
        runner = _runner(log, fake_sleep, on_transition=published.append)

        await runner.run(steps[:1], AutoStartPreferences())

        running = [state for state in published if state.phase is not None]
        phases = list(dict.fromkeys(state.phase for state in running))
        assert phases == [AgentDomain.RESEARCH, AgentDomain.EXECUTION]
        assert all(state.step_index == 0 for state in running)
        assert published[0].started_step_ids == (steps[0].id,)
        assert runner.state == published[-1]

    def test_state_to_dict(self):
        state = RunnerState(
            status=RunnerStatus.RUNNING,
            step_index=1,
            step_id="step-2",
            phase=AgentDomain.EXECUTION,
            completed_step_ids=("step-1",),
        )

        assert state.to_dict() == {
            "status": "running",
            "step_index": 1,
            "step_id": "step-2",
            "phase": "execution",
            "stopped": False,
            "started_step_ids": [],
            "completed_step_ids": ["step-1"],
            "failed_step_ids": [],
        }
