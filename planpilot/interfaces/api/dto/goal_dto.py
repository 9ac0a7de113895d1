"""Goal DTO（Data Transfer Objects）

定义 Goal / PlanStep / SubTask 相关的请求和响应模型
"""

from datetime import datetime

from pydantic import BaseModel, Field

from planpilot.domain.value_objects.plan_status import PlanStatus


class CreateGoalRequest(BaseModel):
    """创建目标请求

    goal 为自由文本；空白文本由领域层拒绝（400）。
    """

    goal: str = Field(..., description="目标文本", examples=["Learn web development in 6 months"])


class ToggleSubTaskRequest(BaseModel):
    completed: bool


class UpdatePlanStatusRequest(BaseModel):
    status: PlanStatus


class GoalResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, goal) -> "GoalResponse":
        return cls(
            id=goal.id,
            user_id=goal.user_id,
            title=goal.title,
            description=goal.description,
            status=goal.status.value,
            created_at=goal.created_at,
            updated_at=goal.updated_at,
        )


class GoalListResponse(BaseModel):
    goals: list[GoalResponse]
    total: int


class SubTaskResponse(BaseModel):
    id: str
    plan_id: str
    title: str
    description: str | None = None
    sequence_order: int
    completed: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, sub_task) -> "SubTaskResponse":
        return cls(
            id=sub_task.id,
            plan_id=sub_task.plan_id,
            title=sub_task.title,
            description=sub_task.description,
            sequence_order=sub_task.sequence_order,
            completed=sub_task.completed,
            created_at=sub_task.created_at,
        )


class PlanStepResponse(BaseModel):
    id: str
    goal_id: str
    title: str
    description: str | None = None
    sequence_order: int
    estimated_duration: str | None = None
    priority: str
    status: str
    created_at: datetime
    sub_tasks: list[SubTaskResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, step, sub_tasks=None) -> "PlanStepResponse":
        return cls(
            id=step.id,
            goal_id=step.goal_id,
            title=step.title,
            description=step.description,
            sequence_order=step.sequence_order,
            estimated_duration=step.estimated_duration,
            priority=step.priority.value,
            status=step.status.value,
            created_at=step.created_at,
            sub_tasks=[SubTaskResponse.from_entity(sub_task) for sub_task in sub_tasks or []],
        )


class GoalPlanResponse(BaseModel):
    """Goal 及其计划树"""

    goal: GoalResponse
    plans: list[PlanStepResponse]

    @classmethod
    def from_plan(cls, plan) -> "GoalPlanResponse":
        return cls(
            goal=GoalResponse.from_entity(plan.goal),
            plans=[
                PlanStepResponse.from_entity(step, plan.sub_tasks_for(step.id))
                for step in plan.steps
            ],
        )
