"""GoalRepository Port - Goal / PlanStep / SubTask 的持久化接口

设计原则：
- 使用 Protocol（结构化子类型，不需要显式继承）
- 方法签名使用领域对象
- 不负责提交事务，调用者通过 TransactionManager 控制
"""

from typing import Protocol

from planpilot.domain.entities.goal import Goal
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.entities.sub_task import SubTask


class GoalRepository(Protocol):
    """Goal 仓储接口

    命名约定：
    - save(): 保存（新增或更新）
    - get_by_id(): 获取（必须存在，否则抛 NotFoundError）
    - find_by_id(): 查找（可以返回 None）
    """

    def save(self, goal: Goal) -> None: ...

    def get_by_id(self, goal_id: str) -> Goal:
        """根据 ID 获取 Goal

        抛出：
            NotFoundError: 当 Goal 不存在时
        """
        ...

    def find_by_id(self, goal_id: str) -> Goal | None: ...

    def find_by_user(self, user_id: str) -> list[Goal]:
        """列出某个用户的 Goal（按创建时间倒序）"""
        ...


class PlanStepRepository(Protocol):
    """PlanStep 仓储接口（task_plans 表）"""

    def save(self, step: PlanStep) -> None: ...

    def save_many(self, steps: list[PlanStep]) -> None: ...

    def get_by_id(self, step_id: str) -> PlanStep:
        """抛出：NotFoundError"""
        ...

    def find_by_goal(self, goal_id: str) -> list[PlanStep]:
        """按 sequence_order 升序返回"""
        ...


class SubTaskRepository(Protocol):
    """SubTask 仓储接口"""

    def save(self, sub_task: SubTask) -> None: ...

    def save_many(self, sub_tasks: list[SubTask]) -> None: ...

    def get_by_id(self, sub_task_id: str) -> SubTask:
        """抛出：NotFoundError"""
        ...

    def find_by_plan_ids(self, plan_ids: list[str]) -> list[SubTask]:
        """按 plan_id、sequence_order 升序返回"""
        ...
