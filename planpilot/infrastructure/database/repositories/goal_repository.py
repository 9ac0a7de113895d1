"""SQLAlchemy Goal / PlanStep / SubTask Repository 实现

职责：
1. 转换：领域实体 ⇄ ORM 模型
2. 持久化：保存、查询
3. 异常转换：SQLAlchemyError → ResultPersistenceError

Repository 不调用 session.commit()，由 TransactionManager 控制事务。
"""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from planpilot.domain.entities.goal import Goal
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.entities.sub_task import SubTask
from planpilot.domain.exceptions import NotFoundError, ResultPersistenceError
from planpilot.domain.value_objects.goal_status import GoalStatus
from planpilot.domain.value_objects.plan_status import PlanStatus, Priority
from planpilot.infrastructure.database.models import GoalModel, PlanStepModel, SubTaskModel
from planpilot.infrastructure.database.repositories._timestamps import (
    to_aware_utc,
    to_naive_utc,
)


class SQLAlchemyGoalRepository:
    def __init__(self, session: Session):
        self.session = session

    # ==================== Assembler 方法 ====================

    def _to_entity(self, model: GoalModel) -> Goal:
        return Goal(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            description=model.description,
            status=GoalStatus(model.status),
            created_at=to_aware_utc(model.created_at),
            updated_at=to_aware_utc(model.updated_at),
        )

    def _to_model(self, entity: Goal) -> GoalModel:
        return GoalModel(
            id=entity.id,
            user_id=entity.user_id,
            title=entity.title,
            description=entity.description,
            status=entity.status.value,
            created_at=to_naive_utc(entity.created_at),
            updated_at=to_naive_utc(entity.updated_at),
        )

    # ==================== Repository 方法 ====================

    def save(self, goal: Goal) -> None:
        try:
            self.session.merge(self._to_model(goal))
            self.session.flush()
        except SQLAlchemyError as exc:
            raise ResultPersistenceError("user_goals", str(exc)) from exc

    def get_by_id(self, goal_id: str) -> Goal:
        goal = self.find_by_id(goal_id)
        if goal is None:
            raise NotFoundError(entity_type="Goal", entity_id=goal_id)
        return goal

    def find_by_id(self, goal_id: str) -> Goal | None:
        model = self.session.get(GoalModel, goal_id)
        return self._to_entity(model) if model is not None else None

    def find_by_user(self, user_id: str) -> list[Goal]:
        stmt = (
            select(GoalModel)
            .where(GoalModel.user_id == user_id)
            .order_by(GoalModel.created_at.desc())
        )
        return [self._to_entity(model) for model in self.session.scalars(stmt).all()]


class SQLAlchemyPlanStepRepository:
    def __init__(self, session: Session):
        self.session = session

    def _to_entity(self, model: PlanStepModel) -> PlanStep:
        return PlanStep(
            id=model.id,
            goal_id=model.goal_id,
            title=model.title,
            description=model.description,
            sequence_order=model.sequence_order,
            estimated_duration=model.estimated_duration,
            priority=Priority(model.priority),
            status=PlanStatus(model.status),
            created_at=to_aware_utc(model.created_at),
        )

    def _to_model(self, entity: PlanStep) -> PlanStepModel:
        return PlanStepModel(
            id=entity.id,
            goal_id=entity.goal_id,
            title=entity.title,
            description=entity.description,
            sequence_order=entity.sequence_order,
            estimated_duration=entity.estimated_duration,
            priority=entity.priority.value,
            status=entity.status.value,
            created_at=to_naive_utc(entity.created_at),
        )

    def save(self, step: PlanStep) -> None:
        self.save_many([step])

    def save_many(self, steps: list[PlanStep]) -> None:
        try:
            for step in steps:
                self.session.merge(self._to_model(step))
            self.session.flush()
        except SQLAlchemyError as exc:
            raise ResultPersistenceError("task_plans", str(exc)) from exc

    def get_by_id(self, step_id: str) -> PlanStep:
        model = self.session.get(PlanStepModel, step_id)
        if model is None:
            raise NotFoundError(entity_type="PlanStep", entity_id=step_id)
        return self._to_entity(model)

    def find_by_goal(self, goal_id: str) -> list[PlanStep]:
        stmt = (
            select(PlanStepModel)
            .where(PlanStepModel.goal_id == goal_id)
            .order_by(PlanStepModel.sequence_order.asc())
        )
        return [self._to_entity(model) for model in self.session.scalars(stmt).all()]


class SQLAlchemySubTaskRepository:
    def __init__(self, session: Session):
        self.session = session

    def _to_entity(self, model: SubTaskModel) -> SubTask:
        return SubTask(
            id=model.id,
            plan_id=model.plan_id,
            title=model.title,
            description=model.description,
            sequence_order=model.sequence_order,
            completed=model.completed,
            created_at=to_aware_utc(model.created_at),
        )

    def _to_model(self, entity: SubTask) -> SubTaskModel:
        return SubTaskModel(
            id=entity.id,
            plan_id=entity.plan_id,
            title=entity.title,
            description=entity.description,
            sequence_order=entity.sequence_order,
            completed=entity.completed,
            created_at=to_naive_utc(entity.created_at),
        )

    def save(self, sub_task: SubTask) -> None:
        self.save_many([sub_task])

    def save_many(self, sub_tasks: list[SubTask]) -> None:
        try:
            for sub_task in sub_tasks:
                self.session.merge(self._to_model(sub_task))
            self.session.flush()
        except SQLAlchemyError as exc:
            raise ResultPersistenceError("sub_tasks", str(exc)) from exc

    def get_by_id(self, sub_task_id: str) -> SubTask:
        model = self.session.get(SubTaskModel, sub_task_id)
        if model is None:
            raise NotFoundError(entity_type="SubTask", entity_id=sub_task_id)
        return self._to_entity(model)

    def find_by_plan_ids(self, plan_ids: list[str]) -> list[SubTask]:
        if not plan_ids:
            return []
        stmt = (
            select(SubTaskModel)
            .where(SubTaskModel.plan_id.in_(plan_ids))
            .order_by(SubTaskModel.plan_id, SubTaskModel.sequence_order.asc())
        )
        return [self._to_entity(model) for model in self.session.scalars(stmt).all()]
