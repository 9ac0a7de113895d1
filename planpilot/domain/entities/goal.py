"""Goal 实体 - 用户输入的自由文本目标

业务定义：
- Goal 是一次计划生成的根：Goal 1:N PlanStep 1:N SubTask
- title 保存用户输入的原始目标文本
- 归属于某个用户（user_id），读取时按归属过滤
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from planpilot.domain.exceptions import DomainError
from planpilot.domain.value_objects.goal_status import GoalStatus


@dataclass
class Goal:
    """Goal 实体

    属性说明：
    - id: 唯一标识符（UUID）
    - user_id: 所属用户
    - title: 目标文本
    - description: 描述（默认 "Generated plan for: <目标>"）
    - status: PLANNING / IN_PROGRESS / COMPLETED
    """

    id: str
    user_id: str
    title: str
    description: str | None
    status: GoalStatus = GoalStatus.PLANNING
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, user_id: str, goal_text: str) -> "Goal":
        """创建 Goal 的工厂方法

        抛出：
            DomainError: 当 user_id 或 goal_text 为空时
        """
        if not user_id or not user_id.strip():
            raise DomainError("user_id 不能为空")
        if not goal_text or not goal_text.strip():
            raise DomainError("goal 不能为空")

        text = goal_text.strip()
        return cls(
            id=str(uuid4()),
            user_id=user_id.strip(),
            title=text,
            description=f"Generated plan for: {text}",
        )

    def change_status(self, status: GoalStatus) -> None:
        self.status = status
        self.updated_at = datetime.now(UTC)
