"""Domain Ports - 领域层定义、基础设施层实现的接口"""

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

__all__ = [
    "DeploymentRepository",
    "ExecutionRepository",
    "GoalRepository",
    "PlanStepRepository",
    "ResearchRepository",
    "SubTaskRepository",
]
