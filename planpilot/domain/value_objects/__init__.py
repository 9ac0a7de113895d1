"""Domain 值对象

导出所有领域值对象，方便其他模块导入
"""

from planpilot.domain.value_objects.agent_domain import PHASE_ORDER, AgentDomain
from planpilot.domain.value_objects.auto_start_preferences import (
    AutoStartPreferences,
    ExecutionMode,
    PhaseFailurePolicy,
    ResearchDepth,
)
from planpilot.domain.value_objects.deployment_type import DeploymentType
from planpilot.domain.value_objects.execution_type import ExecutionOutputType, ExecutionType
from planpilot.domain.value_objects.goal_status import GoalStatus
from planpilot.domain.value_objects.plan_status import PlanStatus, Priority
from planpilot.domain.value_objects.request_status import RequestStatus

__all__ = [
    "PHASE_ORDER",
    "AgentDomain",
    "AutoStartPreferences",
    "DeploymentType",
    "ExecutionMode",
    "ExecutionOutputType",
    "ExecutionType",
    "GoalStatus",
    "PhaseFailurePolicy",
    "PlanStatus",
    "Priority",
    "RequestStatus",
    "ResearchDepth",
]
