"""RequestStatus 枚举 - Agent 请求生命周期状态

业务定义：
- 每次 Agent 调用（research / execution / deployment）都会创建一条请求记录
- 状态流转：PENDING → IN_PROGRESS → (COMPLETED | FAILED)
- 实际创建时直接处于 IN_PROGRESS，PENDING 仅保留在 schema 中

设计原则：
- 继承 str：序列化/数据库存储友好
- 通过 can_transition_to() 固化状态机不变式
"""

from __future__ import annotations

from enum import Enum


class RequestStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"

    def can_transition_to(self, target: RequestStatus) -> bool:
        allowed: dict[RequestStatus, set[RequestStatus]] = {
            RequestStatus.PENDING: {RequestStatus.IN_PROGRESS},
            RequestStatus.IN_PROGRESS: {RequestStatus.COMPLETED, RequestStatus.FAILED},
            RequestStatus.COMPLETED: set(),
            RequestStatus.FAILED: set(),
        }
        return target in allowed[self]

    def is_terminal(self) -> bool:
        return self in {RequestStatus.COMPLETED, RequestStatus.FAILED}
