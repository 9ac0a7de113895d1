"""API Container (composition root state holder).

This module only defines types/structure for objects created in the real
composition root (`planpilot/interfaces/api/main.py`).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from planpilot.application.ports.transaction_manager import TransactionManager
from planpilot.domain.ports.agent_record_repository import (
    DeploymentRepository,
    ExecutionRepository,
    ResearchRepository,
)
from planpilot.domain.ports.goal_repository import (
    GoalRepository,
    PlanStepRepository,
    SubTaskRepository,
)


@dataclass(frozen=True, slots=True)
class ApiContainer:
    """Typed container attached to `app.state.container`."""

    session_factory: Callable[[], Session]
    transaction_manager: Callable[[Session], TransactionManager]

    goal_repository: Callable[[Session], GoalRepository]
    plan_step_repository: Callable[[Session], PlanStepRepository]
    sub_task_repository: Callable[[Session], SubTaskRepository]
    research_repository: Callable[[Session], ResearchRepository]
    execution_repository: Callable[[Session], ExecutionRepository]
    deployment_repository: Callable[[Session], DeploymentRepository]

    # Simulated latency / pacing; tests swap in a no-op.
    agent_sleep: Callable[[float], Awaitable[Any]]
    runner_sleep: Callable[[float], Awaitable[Any]]
