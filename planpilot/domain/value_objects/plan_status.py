"""PlanStatus / Priority 枚举 - Plan Step 的状态与优先级

业务定义：
- PlanStatus 只由用户操作修改，Workflow Runner 不会改写它
- Priority 由计划模板固定给出
"""

from enum import Enum


class PlanStatus(str, Enum):
    """Plan Step 状态

    状态说明：
    - PENDING: 尚未开始
    - IN_PROGRESS: 进行中
    - COMPLETED: 已完成
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
