"""Agent 相关的依赖组装

- build_recorders(): 用同一个 Session 组装三个 Recorder
- ensure_plan_access(): 校验 Plan Step 存在且归属调用方
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from planpilot.application.services.deployment_recorder import DeploymentRecorder
from planpilot.application.services.execution_recorder import ExecutionRecorder
from planpilot.application.services.research_recorder import ResearchRecorder
from planpilot.application.use_cases.get_goal_plan import get_owned_goal
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.interfaces.api.container import ApiContainer


def build_recorders(
    container: ApiContainer, session: Session
) -> tuple[ResearchRecorder, ExecutionRecorder, DeploymentRecorder]:
    transaction_manager = container.transaction_manager(session)
    return (
        ResearchRecorder(
            container.research_repository(session),
            transaction_manager,
            sleep=container.agent_sleep,
        ),
        ExecutionRecorder(
            container.execution_repository(session),
            transaction_manager,
            sleep=container.agent_sleep,
        ),
        DeploymentRecorder(
            container.deployment_repository(session),
            transaction_manager,
            sleep=container.agent_sleep,
        ),
    )


def ensure_plan_access(
    container: ApiContainer, session: Session, plan_id: str, user_id: str
) -> PlanStep:
    """抛出：NotFoundError（Plan Step 不存在或所属 Goal 不属于调用方）"""
    step = container.plan_step_repository(session).get_by_id(plan_id)
    get_owned_goal(container.goal_repository(session), step.goal_id, user_id)
    return step
