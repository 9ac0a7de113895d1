"""Agent 请求的生命周期 - 三类请求共享的状态机

业务定义：
- 请求创建时直接处于 IN_PROGRESS
- 生成内容成功 → COMPLETED；失败 → FAILED
- COMPLETED / FAILED 为终态，不允许再次转换
"""

from __future__ import annotations

from planpilot.domain.exceptions import DomainError
from planpilot.domain.value_objects.request_status import RequestStatus


class RequestLifecycleMixin:
    """为 ResearchRequest / ExecutionRequest / DeploymentRequest 提供状态转换

    子类需要提供 status 字段。
    """

    status: RequestStatus

    def _transition(self, target: RequestStatus) -> None:
        if not self.status.can_transition_to(target):
            raise DomainError(f"非法的请求状态转换: {self.status.value} → {target.value}")
        self.status = target

    def start(self) -> None:
        """PENDING → IN_PROGRESS"""
        self._transition(RequestStatus.IN_PROGRESS)

    def complete(self) -> None:
        """IN_PROGRESS → COMPLETED"""
        self._transition(RequestStatus.COMPLETED)

    def fail(self) -> None:
        """IN_PROGRESS → FAILED"""
        self._transition(RequestStatus.FAILED)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal()
