"""Domain 实体

导出所有领域实体，方便其他模块导入
"""

from planpilot.domain.entities.deployment import (
    DeploymentDraft,
    DeploymentRequest,
    DeploymentResult,
)
from planpilot.domain.entities.execution import ExecutionDraft, ExecutionRequest, ExecutionResult
from planpilot.domain.entities.goal import Goal
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.entities.research import ResearchDraft, ResearchRequest, ResearchResult
from planpilot.domain.entities.sub_task import SubTask

__all__ = [
    "DeploymentDraft",
    "DeploymentRequest",
    "DeploymentResult",
    "ExecutionDraft",
    "ExecutionRequest",
    "ExecutionResult",
    "Goal",
    "PlanStep",
    "ResearchDraft",
    "ResearchRequest",
    "ResearchResult",
    "SubTask",
]
