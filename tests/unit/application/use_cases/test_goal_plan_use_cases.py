"""测试：Goal 计划相关用例

Repository 与 TransactionManager 使用 Mock。
"""

from unittest.mock import AsyncMock, Mock

import pytest

from planpilot.application.use_cases.auto_start_workflow import (
    AutoStartWorkflowUseCase,
    load_goal_steps,
)
from planpilot.application.use_cases.create_goal_plan import (
    CreateGoalPlanInput,
    CreateGoalPlanUseCase,
)
from planpilot.application.use_cases.get_goal_plan import GetGoalPlanUseCase, get_owned_goal
from planpilot.application.use_cases.update_plan_progress import (
    ToggleSubTaskUseCase,
    UpdatePlanStepStatusUseCase,
)
from planpilot.domain.entities.goal import Goal
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.entities.sub_task import SubTask
from planpilot.domain.exceptions import DomainError, NotFoundError, ResultPersistenceError
from planpilot.domain.value_objects.auto_start_preferences import AutoStartPreferences
from planpilot.domain.value_objects.plan_status import PlanStatus


@pytest.fixture
def goal_repository():
    return Mock()


@pytest.fixture
def plan_step_repository():
    return Mock()


@pytest.fixture
def sub_task_repository():
    return Mock()


@pytest.fixture
def transaction_manager():
    return Mock()


class TestCreateGoalPlanUseCase:
    @pytest.fixture
    def use_case(
        self, goal_repository, plan_step_repository, sub_task_repository, transaction_manager
    ):
        return CreateGoalPlanUseCase(
            goal_repository=goal_repository,
            plan_step_repository=plan_step_repository,
            sub_task_repository=sub_task_repository,
            transaction_manager=transaction_manager,
        )

    def test_expands_goal_into_plan(
        self, use_case, goal_repository, plan_step_repository, transaction_manager
    ):
        plan = use_case.execute(
            CreateGoalPlanInput(user_id="user-1", goal="Learn web development in 6 months")
        )

        assert plan.goal.title == "Learn web development in 6 months"
        assert [step.sequence_order for step in plan.steps] == [1, 2, 3, 4, 5]
        assert all(step.goal_id == plan.goal.id for step in plan.steps)
        assert len(plan.sub_tasks) == 25
        assert plan.sub_tasks_for(plan.steps[0].id)[0].title == "Assess current knowledge"

        goal_repository.save.assert_called_once_with(plan.goal)
        plan_step_repository.save_many.assert_called_once_with(plan.steps)
        assert transaction_manager.commit.call_count == 3

    def test_blank_goal_rejected_before_writes(self, use_case, goal_repository):
        with pytest.raises(DomainError):
            use_case.execute(CreateGoalPlanInput(user_id="user-1", goal="  "))

        goal_repository.save.assert_not_called()

    def test_goal_insert_failure_propagates(
        self, use_case, goal_repository, plan_step_repository, transaction_manager
    ):
        goal_repository.save.side_effect = ResultPersistenceError("user_goals", "disk full")

        with pytest.raises(ResultPersistenceError):
            use_case.execute(CreateGoalPlanInput(user_id="user-1", goal="Plan a trip"))

        transaction_manager.rollback.assert_called_once()
        plan_step_repository.save_many.assert_not_called()

    def test_sub_task_failure_keeps_goal_and_steps(
        self, use_case, sub_task_repository, transaction_manager
    ):
        sub_task_repository.save_many.side_effect = ResultPersistenceError("sub_tasks", "locked")

        plan = use_case.execute(CreateGoalPlanInput(user_id="user-1", goal="Plan a trip"))

        assert len(plan.steps) == 4
        assert plan.sub_tasks == []
        transaction_manager.rollback.assert_called_once()
        assert transaction_manager.commit.call_count == 2


class TestGetGoalPlan:
    def test_other_users_goal_is_not_found(self, goal_repository):
        goal_repository.find_by_id.return_value = Goal.create("owner", "Learn Rust")

        with pytest.raises(NotFoundError):
            get_owned_goal(goal_repository, "goal-1", "someone-else")

    def test_missing_goal_is_not_found(self, goal_repository):
        goal_repository.find_by_id.return_value = None

        with pytest.raises(NotFoundError):
            get_owned_goal(goal_repository, "goal-1", "owner")

    def test_returns_tree(self, goal_repository, plan_step_repository, sub_task_repository):
        goal = Goal.create("owner", "Learn Rust")
        step = PlanStep.create(goal.id, "Foundation & Prerequisites", None, 1)
        sub_task = SubTask.create(step.id, "Assess current knowledge", None, 1)
        goal_repository.find_by_id.return_value = goal
        plan_step_repository.find_by_goal.return_value = [step]
        sub_task_repository.find_by_plan_ids.return_value = [sub_task]

        plan = GetGoalPlanUseCase(
            goal_repository, plan_step_repository, sub_task_repository
        ).execute(goal.id, "owner")

        assert plan.goal is goal
        assert plan.sub_tasks_for(step.id) == [sub_task]
        sub_task_repository.find_by_plan_ids.assert_called_once_with([step.id])


class TestUpdatePlanProgress:
    def test_toggle_sub_task(self, sub_task_repository, transaction_manager):
        sub_task = SubTask.create("plan-1", "Create study schedule", None, 1)
        sub_task_repository.get_by_id.return_value = sub_task

        result = ToggleSubTaskUseCase(sub_task_repository, transaction_manager).execute(
            sub_task.id, True
        )

        assert result.completed is True
        sub_task_repository.save.assert_called_once_with(sub_task)
        transaction_manager.commit.assert_called_once()

    def test_update_plan_status(self, plan_step_repository, transaction_manager):
        step = PlanStep.create("goal-1", "Resource Planning", None, 2)
        plan_step_repository.get_by_id.return_value = step

        result = UpdatePlanStepStatusUseCase(plan_step_repository, transaction_manager).execute(
            step.id, "completed"
        )

        assert result.status == PlanStatus.COMPLETED
        transaction_manager.commit.assert_called_once()

    def test_missing_sub_task(self, sub_task_repository, transaction_manager):
        sub_task_repository.get_by_id.side_effect = NotFoundError("SubTask", "missing")

        with pytest.raises(NotFoundError):
            ToggleSubTaskUseCase(sub_task_repository, transaction_manager).execute("missing", True)

        transaction_manager.commit.assert_not_called()


class TestAutoStartWorkflowUseCase:
    def test_steps_sorted_by_sequence(self, goal_repository, plan_step_repository):
        goal = Goal.create("owner", "Learn Rust")
        second = PlanStep.create(goal.id, "Structured Learning Path", None, 2)
        first = PlanStep.create(goal.id, "Foundation & Prerequisites", None, 1)
        goal_repository.find_by_id.return_value = goal
        plan_step_repository.find_by_goal.return_value = [second, first]

        steps = load_goal_steps(goal_repository, plan_step_repository, goal.id, "owner")

        assert steps == [first, second]

    def test_goal_without_steps_rejected(self, goal_repository, plan_step_repository):
        goal_repository.find_by_id.return_value = Goal.create("owner", "Learn Rust")
        plan_step_repository.find_by_goal.return_value = []

        with pytest.raises(DomainError):
            load_goal_steps(goal_repository, plan_step_repository, "goal-1", "owner")

    @pytest.mark.asyncio
    async def test_runs_runner_with_loaded_steps(self, goal_repository, plan_step_repository):
        goal = Goal.create("owner", "Learn Rust")
        step = PlanStep.create(goal.id, "Foundation & Prerequisites", None, 1)
        goal_repository.find_by_id.return_value = goal
        plan_step_repository.find_by_goal.return_value = [step]
        runner = Mock(run=AsyncMock(return_value="final-state"))
        preferences = AutoStartPreferences()

        result = await AutoStartWorkflowUseCase(
            goal_repository, plan_step_repository, runner
        ).execute(goal.id, "owner", preferences)

        assert result == "final-state"
        runner.run.assert_awaited_once_with([step], preferences, None)
