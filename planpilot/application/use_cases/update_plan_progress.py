"""用户手动更新进度的用例

- ToggleSubTaskUseCase: 勾选/取消勾选子任务
- UpdatePlanStepStatusUseCase: 修改计划步骤状态

Workflow Runner 不会调用这两个用例。
"""

from __future__ import annotations

from planpilot.application.ports.transaction_manager import TransactionManager
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.entities.sub_task import SubTask
from planpilot.domain.ports.goal_repository import PlanStepRepository, SubTaskRepository
from planpilot.domain.value_objects.plan_status import PlanStatus


class ToggleSubTaskUseCase:
    def __init__(
        self,
        sub_task_repository: SubTaskRepository,
        transaction_manager: TransactionManager,
    ):
        self.sub_task_repository = sub_task_repository
        self.transaction_manager = transaction_manager

    def execute(self, sub_task_id: str, completed: bool) -> SubTask:
        """抛出：NotFoundError"""
        sub_task = self.sub_task_repository.get_by_id(sub_task_id)
        sub_task.toggle(completed)
        self.sub_task_repository.save(sub_task)
        self.transaction_manager.commit()
        return sub_task


class UpdatePlanStepStatusUseCase:
    def __init__(
        self,
        plan_step_repository: PlanStepRepository,
        transaction_manager: TransactionManager,
    ):
        self.plan_step_repository = plan_step_repository
        self.transaction_manager = transaction_manager

    def execute(self, step_id: str, status: PlanStatus | str) -> PlanStep:
        """抛出：NotFoundError"""
        step = self.plan_step_repository.get_by_id(step_id)
        step.change_status(PlanStatus(status))
        self.plan_step_repository.save(step)
        self.transaction_manager.commit()
        return step
