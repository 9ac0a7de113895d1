"""API DTO"""

from planpilot.interfaces.api.dto.agent_dto import (
    DeploymentBody,
    DeploymentHistoryEntry,
    DeploymentOutcomeResponse,
    DeploymentProviderResponse,
    DeploymentRequestResponse,
    DeploymentResultResponse,
    ExecutionBody,
    ExecutionHistoryEntry,
    ExecutionOutcomeResponse,
    ExecutionRequestResponse,
    ExecutionResultResponse,
    ResearchBody,
    ResearchHistoryEntry,
    ResearchOutcomeResponse,
    ResearchRequestResponse,
    ResearchResultResponse,
)
from planpilot.interfaces.api.dto.auto_start_dto import AutoStartRequest, RunnerStateResponse
from planpilot.interfaces.api.dto.goal_dto import (
    CreateGoalRequest,
    GoalListResponse,
    GoalPlanResponse,
    GoalResponse,
    PlanStepResponse,
    SubTaskResponse,
    ToggleSubTaskRequest,
    UpdatePlanStatusRequest,
)

__all__ = [
    "AutoStartRequest",
    "CreateGoalRequest",
    "DeploymentBody",
    "DeploymentHistoryEntry",
    "DeploymentOutcomeResponse",
    "DeploymentProviderResponse",
    "DeploymentRequestResponse",
    "DeploymentResultResponse",
    "ExecutionBody",
    "ExecutionHistoryEntry",
    "ExecutionOutcomeResponse",
    "ExecutionRequestResponse",
    "ExecutionResultResponse",
    "GoalListResponse",
    "GoalPlanResponse",
    "GoalResponse",
    "PlanStepResponse",
    "ResearchBody",
    "ResearchHistoryEntry",
    "ResearchOutcomeResponse",
    "ResearchRequestResponse",
    "ResearchResultResponse",
    "RunnerStateResponse",
    "SubTaskResponse",
    "ToggleSubTaskRequest",
    "UpdatePlanStatusRequest",
]
