"""Goal / PlanStep / SubTask Repository 单元测试

测试原则:
- 使用 SQLite 内存数据库（开启外键）
- 每个测试独立运行（fixture 隔离）
- Repository 只 flush，不 commit
"""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import delete, func, select

from planpilot.domain.entities.goal import Goal
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.entities.sub_task import SubTask
from planpilot.domain.exceptions import NotFoundError, ResultPersistenceError
from planpilot.domain.value_objects.plan_status import PlanStatus, Priority
from planpilot.infrastructure.database.models import GoalModel, SubTaskModel
from planpilot.infrastructure.database.repositories.goal_repository import (
    SQLAlchemyGoalRepository,
    SQLAlchemyPlanStepRepository,
    SQLAlchemySubTaskRepository,
)

# ==================== Fixtures ====================


@pytest.fixture
def goal_repo(db_session):
    return SQLAlchemyGoalRepository(db_session)


@pytest.fixture
def step_repo(db_session):
    return SQLAlchemyPlanStepRepository(db_session)


@pytest.fixture
def sub_task_repo(db_session):
    return SQLAlchemySubTaskRepository(db_session)


@pytest.fixture
def goal(goal_repo) -> Goal:
    goal = Goal.create("user-1", "Learn web development")
    goal_repo.save(goal)
    return goal


# ==================== Goal ====================


class TestGoalRepository:
    def test_save_and_get(self, goal_repo, goal):
        loaded = goal_repo.get_by_id(goal.id)

        assert loaded.title == "Learn web development"
        assert loaded.user_id == "user-1"
        assert loaded.created_at.tzinfo is not None
        assert loaded.created_at == goal.created_at

    def test_get_missing_raises(self, goal_repo):
        with pytest.raises(NotFoundError):
            goal_repo.get_by_id("missing")

    def test_find_missing_returns_none(self, goal_repo):
        assert goal_repo.find_by_id("missing") is None

    def test_find_by_user_newest_first(self, goal_repo):
        base = datetime(2026, 1, 1, tzinfo=UTC)
        older = Goal.create("user-1", "Plan a trip")
        older.created_at = base
        newer = Goal.create("user-1", "Start a business")
        newer.created_at = base + timedelta(hours=1)
        other = Goal.create("user-2", "Plan a party")
        for item in (older, newer, other):
            goal_repo.save(item)

        goals = goal_repo.find_by_user("user-1")

        assert [item.id for item in goals] == [newer.id, older.id]

    def test_save_updates_existing_row(self, goal_repo, goal, db_session):
        goal.title = "Learn Rust"
        goal_repo.save(goal)

        assert goal_repo.get_by_id(goal.id).title == "Learn Rust"
        assert db_session.scalar(select(func.count()).select_from(GoalModel)) == 1


# ==================== PlanStep / SubTask ====================


class TestPlanStepRepository:
    def test_find_by_goal_ordered_by_sequence(self, step_repo, goal):
        third = PlanStep.create(goal.id, "Practical Application", None, 3)
        first = PlanStep.create(goal.id, "Foundation & Prerequisites", None, 1, "1-2 weeks")
        second = PlanStep.create(goal.id, "Structured Learning Path", None, 2)
        step_repo.save_many([third, first, second])

        steps = step_repo.find_by_goal(goal.id)

        assert [step.sequence_order for step in steps] == [1, 2, 3]
        assert steps[0].estimated_duration == "1-2 weeks"
        assert steps[0].priority == Priority.MEDIUM

    def test_status_change_is_persisted(self, step_repo, goal):
        step = PlanStep.create(goal.id, "Foundation & Prerequisites", None, 1)
        step_repo.save(step)

        step.change_status(PlanStatus.IN_PROGRESS)
        step_repo.save(step)

        assert step_repo.get_by_id(step.id).status == PlanStatus.IN_PROGRESS

    def test_step_for_unknown_goal_raises(self, step_repo):
        step = PlanStep.create("no-such-goal", "Foundation & Prerequisites", None, 1)

        with pytest.raises(ResultPersistenceError) as exc_info:
            step_repo.save(step)

        assert exc_info.value.table == "task_plans"


class TestSubTaskRepository:
    def test_find_by_plan_ids(self, step_repo, sub_task_repo, goal):
        step = PlanStep.create(goal.id, "Foundation & Prerequisites", None, 1)
        step_repo.save(step)
        sub_tasks = [
            SubTask.create(step.id, "Create study schedule", None, 2),
            SubTask.create(step.id, "Assess current knowledge", None, 1),
        ]
        sub_task_repo.save_many(sub_tasks)

        loaded = sub_task_repo.find_by_plan_ids([step.id])

        assert [sub_task.title for sub_task in loaded] == [
            "Assess current knowledge",
            "Create study schedule",
        ]

    def test_find_by_empty_plan_ids(self, sub_task_repo):
        assert sub_task_repo.find_by_plan_ids([]) == []

    def test_toggle_persisted(self, step_repo, sub_task_repo, goal):
        step = PlanStep.create(goal.id, "Foundation & Prerequisites", None, 1)
        step_repo.save(step)
        sub_task = SubTask.create(step.id, "Create study schedule", None, 1)
        sub_task_repo.save(sub_task)

        sub_task.toggle(True)
        sub_task_repo.save(sub_task)

        assert sub_task_repo.get_by_id(sub_task.id).completed is True


class TestCascadeDelete:
    def test_deleting_goal_removes_steps_and_sub_tasks(
        self, db_session, step_repo, sub_task_repo, goal
    ):
        step = PlanStep.create(goal.id, "Foundation & Prerequisites", None, 1)
        step_repo.save(step)
        sub_task_repo.save(SubTask.create(step.id, "Create study schedule", None, 1))
        db_session.commit()

        db_session.execute(delete(GoalModel).where(GoalModel.id == goal.id))
        db_session.commit()
        db_session.expunge_all()

        assert step_repo.find_by_goal(goal.id) == []
        assert db_session.scalar(select(func.count()).select_from(SubTaskModel)) == 0
