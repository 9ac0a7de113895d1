"""CreateGoalPlanUseCase - 把自由文本目标展开为计划步骤与子任务

执行流程：
1. Goal.create() 校验目标文本（空白抛 DomainError）
2. generate_task_plan() 按关键词选择模板
3. 保存 Goal 并提交
4. 保存全部 PlanStep 并提交
5. 保存全部 SubTask 并提交；失败只记录日志，不回补不一致

每一步独立提交，第 5 步失败时 Goal 与 PlanStep 保留。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from planpilot.application.ports.transaction_manager import TransactionManager
from planpilot.domain.entities.goal import Goal
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.entities.sub_task import SubTask
from planpilot.domain.exceptions import ResultPersistenceError
from planpilot.domain.ports.goal_repository import (
    GoalRepository,
    PlanStepRepository,
    SubTaskRepository,
)
from planpilot.domain.services.content.plan_templates import generate_task_plan

logger = logging.getLogger(__name__)


@dataclass
class CreateGoalPlanInput:
    user_id: str
    goal: str


@dataclass
class GoalPlan:
    """Goal 及其计划树"""

    goal: Goal
    steps: list[PlanStep]
    sub_tasks: list[SubTask] = field(default_factory=list)

    def sub_tasks_for(self, step_id: str) -> list[SubTask]:
        return [sub_task for sub_task in self.sub_tasks if sub_task.plan_id == step_id]


class CreateGoalPlanUseCase:
    def __init__(
        self,
        goal_repository: GoalRepository,
        plan_step_repository: PlanStepRepository,
        sub_task_repository: SubTaskRepository,
        transaction_manager: TransactionManager,
    ):
        self.goal_repository = goal_repository
        self.plan_step_repository = plan_step_repository
        self.sub_task_repository = sub_task_repository
        self.transaction_manager = transaction_manager

    def execute(self, input_data: CreateGoalPlanInput) -> GoalPlan:
        """执行用例

        抛出：
            DomainError: 目标文本为空
            ResultPersistenceError: Goal 或 PlanStep 写入失败
        """
        goal = Goal.create(user_id=input_data.user_id, goal_text=input_data.goal)
        generated = generate_task_plan(goal.title)

        self._save(lambda: self.goal_repository.save(goal))

        steps = [
            PlanStep.create(
                goal_id=goal.id,
                title=draft.title,
                description=draft.description,
                sequence_order=draft.sequence_order,
                estimated_duration=draft.estimated_duration,
                priority=draft.priority,
            )
            for draft in generated.plans
        ]
        self._save(lambda: self.plan_step_repository.save_many(steps))

        sub_tasks = [
            SubTask.create(
                plan_id=step.id,
                title=draft.title,
                description=draft.description,
                sequence_order=draft.sequence_order,
            )
            for step, drafts in zip(steps, generated.sub_tasks, strict=True)
            for draft in drafts
        ]
        try:
            self._save(lambda: self.sub_task_repository.save_many(sub_tasks))
        except ResultPersistenceError as exc:
            logger.warning("Sub-task insertion failed for goal %s: %s", goal.id, exc)
            sub_tasks = []

        return GoalPlan(goal=goal, steps=steps, sub_tasks=sub_tasks)

    def _save(self, write) -> None:
        try:
            write()
            self.transaction_manager.commit()
        except ResultPersistenceError:
            self.transaction_manager.rollback()
            raise
