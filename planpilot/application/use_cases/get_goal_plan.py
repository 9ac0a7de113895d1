"""读取 Goal 计划树的用例

- GetGoalPlanUseCase: Goal + 按顺序的 PlanStep + 按顺序的 SubTask
- ListGoalsUseCase: 某个用户的 Goal（按创建时间倒序）

其他用户的 Goal 一律视为不存在。
"""

from __future__ import annotations

from planpilot.application.use_cases.create_goal_plan import GoalPlan
from planpilot.domain.entities.goal import Goal
from planpilot.domain.exceptions import NotFoundError
from planpilot.domain.ports.goal_repository import (
    GoalRepository,
    PlanStepRepository,
    SubTaskRepository,
)


def get_owned_goal(goal_repository: GoalRepository, goal_id: str, user_id: str) -> Goal:
    """获取归属于 user_id 的 Goal

    抛出：
        NotFoundError: Goal 不存在或不属于该用户
    """
    goal = goal_repository.find_by_id(goal_id)
    if goal is None or goal.user_id != user_id:
        raise NotFoundError("Goal", goal_id)
    return goal


class GetGoalPlanUseCase:
    def __init__(
        self,
        goal_repository: GoalRepository,
        plan_step_repository: PlanStepRepository,
        sub_task_repository: SubTaskRepository,
    ):
        self.goal_repository = goal_repository
        self.plan_step_repository = plan_step_repository
        self.sub_task_repository = sub_task_repository

    def execute(self, goal_id: str, user_id: str) -> GoalPlan:
        goal = get_owned_goal(self.goal_repository, goal_id, user_id)
        steps = self.plan_step_repository.find_by_goal(goal.id)
        sub_tasks = self.sub_task_repository.find_by_plan_ids([step.id for step in steps])
        return GoalPlan(goal=goal, steps=steps, sub_tasks=sub_tasks)


class ListGoalsUseCase:
    def __init__(self, goal_repository: GoalRepository):
        self.goal_repository = goal_repository

    def execute(self, user_id: str) -> list[Goal]:
        return self.goal_repository.find_by_user(user_id)
