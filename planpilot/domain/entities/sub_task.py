"""SubTask 实体 - Plan Step 下的检查项"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from planpilot.domain.exceptions import DomainError


@dataclass
class SubTask:
    id: str
    plan_id: str
    title: str
    description: str | None
    sequence_order: int
    completed: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        plan_id: str,
        title: str,
        description: str | None,
        sequence_order: int,
    ) -> "SubTask":
        if not plan_id or not plan_id.strip():
            raise DomainError("plan_id 不能为空")
        if not title or not title.strip():
            raise DomainError("title 不能为空")

        return cls(
            id=str(uuid4()),
            plan_id=plan_id,
            title=title.strip(),
            description=description,
            sequence_order=sequence_order,
        )

    def toggle(self, completed: bool) -> None:
        """由用户直接勾选/取消勾选"""
        self.completed = completed
