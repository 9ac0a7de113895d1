"""PlanStep 实体 - 目标拆解出的一个有序步骤（task_plans 表）

业务定义：
- 在目标展开时批量创建，创建后数量不再变化
- status 只由用户操作修改（Workflow Runner 只做 UI 层面的 started/completed 标记）
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from planpilot.domain.exceptions import DomainError
from planpilot.domain.value_objects.plan_status import PlanStatus, Priority


@dataclass
class PlanStep:
    """PlanStep 实体

    属性说明：
    - goal_id: 所属 Goal
    - sequence_order: 从 1 开始的顺序号
    - estimated_duration: 预估时长标签（如 "2-3 weeks"）
    - priority: LOW / MEDIUM / HIGH
    - status: PENDING / IN_PROGRESS / COMPLETED
    """

    id: str
    goal_id: str
    title: str
    description: str | None
    sequence_order: int
    estimated_duration: str | None
    priority: Priority = Priority.MEDIUM
    status: PlanStatus = PlanStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        goal_id: str,
        title: str,
        description: str | None,
        sequence_order: int,
        estimated_duration: str | None = None,
        priority: Priority = Priority.MEDIUM,
    ) -> "PlanStep":
        if not goal_id or not goal_id.strip():
            raise DomainError("goal_id 不能为空")
        if not title or not title.strip():
            raise DomainError("title 不能为空")
        if sequence_order < 1:
            raise DomainError("sequence_order 必须从 1 开始")

        return cls(
            id=str(uuid4()),
            goal_id=goal_id,
            title=title.strip(),
            description=description,
            sequence_order=sequence_order,
            estimated_duration=estimated_duration,
            priority=priority,
        )

    def change_status(self, status: PlanStatus) -> None:
        self.status = status
