"""Application Services - Agent Recorder 与 Workflow Runner"""

from planpilot.application.services.agent_recorder import (
    AgentOutcome,
    AgentOutcomeKind,
    AgentRecorder,
)
from planpilot.application.services.deployment_recorder import DeploymentInput, DeploymentRecorder
from planpilot.application.services.execution_recorder import ExecutionInput, ExecutionRecorder
from planpilot.application.services.research_recorder import ResearchInput, ResearchRecorder
from planpilot.application.services.workflow_runner import (
    CancellationToken,
    RunnerState,
    RunnerStatus,
    WorkflowRunner,
)

__all__ = [
    "AgentOutcome",
    "AgentOutcomeKind",
    "AgentRecorder",
    "CancellationToken",
    "DeploymentInput",
    "DeploymentRecorder",
    "ExecutionInput",
    "ExecutionRecorder",
    "ResearchInput",
    "ResearchRecorder",
    "RunnerState",
    "RunnerStatus",
    "WorkflowRunner",
]
