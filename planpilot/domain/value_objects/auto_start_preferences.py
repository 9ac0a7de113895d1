"""AutoStartPreferences 值对象 - "一键启动全部任务" 的用户偏好

业务定义：
- 只在一次 Workflow Runner 调用期间存在，不持久化
- 决定启用哪些阶段、每个阶段的深度/模式/部署目标、阶段间延迟

字段说明：
- enable_research / enable_execution / enable_deployment: 是否启用对应阶段
- research_depth: 研究深度（basic / detailed / comprehensive）
- execution_mode: 执行模式（conservative / standard / aggressive）
- deployment_provider: 部署目标
- auto_progress_delay: 每个已启用阶段结束后的等待时间（秒）
- pause_between_steps: 步骤之间是否额外暂停
- phase_failure_policy: 阶段失败后跳过本步骤剩余阶段，还是继续执行
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from planpilot.domain.exceptions import DomainError
from planpilot.domain.value_objects.deployment_type import DeploymentType


class ResearchDepth(str, Enum):
    BASIC = "basic"
    DETAILED = "detailed"
    COMPREHENSIVE = "comprehensive"


class ExecutionMode(str, Enum):
    CONSERVATIVE = "conservative"
    STANDARD = "standard"
    AGGRESSIVE = "aggressive"


class PhaseFailurePolicy(str, Enum):
    """阶段失败后的处理策略

    - SKIP_STEP: 跳过当前步骤剩余阶段，继续下一个步骤
    - CONTINUE_STEP: 继续执行当前步骤的下一个已启用阶段
    """

    SKIP_STEP = "skip_step"
    CONTINUE_STEP = "continue_step"


@dataclass(frozen=True)
class AutoStartPreferences:
    enable_research: bool = True
    enable_execution: bool = True
    enable_deployment: bool = False
    research_depth: ResearchDepth = ResearchDepth.DETAILED
    execution_mode: ExecutionMode = ExecutionMode.STANDARD
    deployment_provider: DeploymentType = DeploymentType.NETLIFY_STATIC
    auto_progress_delay: float = 5.0
    pause_between_steps: bool = True
    phase_failure_policy: PhaseFailurePolicy = PhaseFailurePolicy.SKIP_STEP

    def __post_init__(self) -> None:
        if self.auto_progress_delay < 0:
            raise DomainError("auto_progress_delay 不能为负数")

    @property
    def has_enabled_phase(self) -> bool:
        return self.enable_research or self.enable_execution or self.enable_deployment
