"""AutoStartWorkflowUseCase - 为某个 Goal 的全部计划步骤运行 Workflow Runner

加载 Goal（校验归属）与按 sequence_order 排序的 PlanStep，交给 runner。
"""

from __future__ import annotations

import logging

from planpilot.application.services.workflow_runner import (
    CancellationToken,
    RunnerState,
    WorkflowRunner,
)
from planpilot.application.use_cases.get_goal_plan import get_owned_goal
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.exceptions import DomainError
from planpilot.domain.ports.goal_repository import GoalRepository, PlanStepRepository
from planpilot.domain.value_objects.auto_start_preferences import AutoStartPreferences

logger = logging.getLogger(__name__)


def load_goal_steps(
    goal_repository: GoalRepository,
    plan_step_repository: PlanStepRepository,
    goal_id: str,
    user_id: str,
) -> list[PlanStep]:
    """按 sequence_order 返回 Goal 的计划步骤

    抛出：
        NotFoundError: Goal 不存在或不属于该用户
        DomainError: Goal 没有计划步骤
    """
    goal = get_owned_goal(goal_repository, goal_id, user_id)
    steps = plan_step_repository.find_by_goal(goal.id)
    if not steps:
        raise DomainError(f"Goal {goal_id} 没有计划步骤")
    return sorted(steps, key=lambda step: step.sequence_order)


class AutoStartWorkflowUseCase:
    def __init__(
        self,
        goal_repository: GoalRepository,
        plan_step_repository: PlanStepRepository,
        runner: WorkflowRunner,
    ):
        self.goal_repository = goal_repository
        self.plan_step_repository = plan_step_repository
        self.runner = runner

    async def execute(
        self,
        goal_id: str,
        user_id: str,
        preferences: AutoStartPreferences,
        cancel_token: CancellationToken | None = None,
        steps: list[PlanStep] | None = None,
    ) -> RunnerState:
        if steps is None:
            steps = load_goal_steps(
                self.goal_repository, self.plan_step_repository, goal_id, user_id
            )
        logger.info("Auto-starting %d step(s) for goal %s", len(steps), goal_id)
        return await self.runner.run(steps, preferences, cancel_token)
