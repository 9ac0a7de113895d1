"""Auto-start DTO - "一键启动全部任务" 的偏好与运行状态"""

from pydantic import BaseModel, Field

from planpilot.config import settings
from planpilot.domain.value_objects.auto_start_preferences import (
    AutoStartPreferences,
    ExecutionMode,
    PhaseFailurePolicy,
    ResearchDepth,
)
from planpilot.domain.value_objects.deployment_type import DeploymentType


class AutoStartRequest(BaseModel):
    enable_research: bool = True
    enable_execution: bool = True
    enable_deployment: bool = False
    research_depth: ResearchDepth = ResearchDepth.DETAILED
    execution_mode: ExecutionMode = ExecutionMode.STANDARD
    deployment_provider: DeploymentType = DeploymentType.NETLIFY_STATIC
    auto_progress_delay: float = Field(
        default_factory=lambda: settings.default_auto_progress_delay,
        ge=0.0,
        description="每个阶段完成后的等待时间（秒）",
    )
    pause_between_steps: bool = True
    phase_failure_policy: PhaseFailurePolicy = Field(
        default_factory=lambda: PhaseFailurePolicy(settings.default_phase_failure_policy)
    )

    def to_preferences(self) -> AutoStartPreferences:
        return AutoStartPreferences(
            enable_research=self.enable_research,
            enable_execution=self.enable_execution,
            enable_deployment=self.enable_deployment,
            research_depth=self.research_depth,
            execution_mode=self.execution_mode,
            deployment_provider=self.deployment_provider,
            auto_progress_delay=self.auto_progress_delay,
            pause_between_steps=self.pause_between_steps,
            phase_failure_policy=self.phase_failure_policy,
        )


class RunnerStateResponse(BaseModel):
    goal_id: str
    status: str
    step_index: int | None = None
    step_id: str | None = None
    phase: str | None = None
    stopped: bool = False
    started_step_ids: list[str] = Field(default_factory=list)
    completed_step_ids: list[str] = Field(default_factory=list)
    failed_step_ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_state(cls, goal_id: str, state) -> "RunnerStateResponse":
        return cls(goal_id=goal_id, **state.to_dict())
