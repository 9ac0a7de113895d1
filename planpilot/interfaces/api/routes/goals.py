"""Goals 路由

- POST /api/goals - 把目标展开为计划
- GET /api/goals - 列出调用方的目标
- GET /api/goals/{goal_id} - 获取目标及计划树
- PATCH /api/sub-tasks/{sub_task_id} - 勾选/取消勾选子任务
- PATCH /api/plans/{plan_id}/status - 修改计划步骤状态

异常处理：
- 404: 实体不存在或不属于调用方
- 400: 业务规则违反
- 500: 其他错误
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from planpilot.application.use_cases.create_goal_plan import (
    CreateGoalPlanInput,
    CreateGoalPlanUseCase,
)
from planpilot.application.use_cases.get_goal_plan import GetGoalPlanUseCase, ListGoalsUseCase
from planpilot.application.use_cases.update_plan_progress import (
    ToggleSubTaskUseCase,
    UpdatePlanStepStatusUseCase,
)
from planpilot.domain.exceptions import DomainError, NotFoundError
from planpilot.infrastructure.database.engine import get_db_session
from planpilot.interfaces.api.container import ApiContainer
from planpilot.interfaces.api.dependencies.agents import ensure_plan_access
from planpilot.interfaces.api.dependencies.container import get_container
from planpilot.interfaces.api.dependencies.current_user import get_current_user_id
from planpilot.interfaces.api.dto import (
    CreateGoalRequest,
    GoalListResponse,
    GoalPlanResponse,
    GoalResponse,
    PlanStepResponse,
    SubTaskResponse,
    ToggleSubTaskRequest,
    UpdatePlanStatusRequest,
)

router = APIRouter(tags=["Goals"])


@router.post("/goals", response_model=GoalPlanResponse, status_code=status.HTTP_201_CREATED)
def create_goal(
    request: CreateGoalRequest,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> GoalPlanResponse:
    use_case = CreateGoalPlanUseCase(
        goal_repository=container.goal_repository(session),
        plan_step_repository=container.plan_step_repository(session),
        sub_task_repository=container.sub_task_repository(session),
        transaction_manager=container.transaction_manager(session),
    )
    try:
        plan = use_case.execute(CreateGoalPlanInput(user_id=user_id, goal=request.goal))
    except DomainError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    return GoalPlanResponse.from_plan(plan)


@router.get("/goals", response_model=GoalListResponse)
def list_goals(
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> GoalListResponse:
    goals = ListGoalsUseCase(container.goal_repository(session)).execute(user_id)
    return GoalListResponse(
        goals=[GoalResponse.from_entity(goal) for goal in goals],
        total=len(goals),
    )


@router.get("/goals/{goal_id}", response_model=GoalPlanResponse)
def get_goal(
    goal_id: str,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> GoalPlanResponse:
    use_case = GetGoalPlanUseCase(
        goal_repository=container.goal_repository(session),
        plan_step_repository=container.plan_step_repository(session),
        sub_task_repository=container.sub_task_repository(session),
    )
    try:
        plan = use_case.execute(goal_id, user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return GoalPlanResponse.from_plan(plan)


@router.patch("/sub-tasks/{sub_task_id}", response_model=SubTaskResponse)
def toggle_sub_task(
    sub_task_id: str,
    request: ToggleSubTaskRequest,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> SubTaskResponse:
    repository = container.sub_task_repository(session)
    try:
        ensure_plan_access(container, session, repository.get_by_id(sub_task_id).plan_id, user_id)
        sub_task = ToggleSubTaskUseCase(
            repository, container.transaction_manager(session)
        ).execute(sub_task_id, request.completed)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DomainError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return SubTaskResponse.from_entity(sub_task)


@router.patch("/plans/{plan_id}/status", response_model=PlanStepResponse)
def update_plan_status(
    plan_id: str,
    request: UpdatePlanStatusRequest,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> PlanStepResponse:
    try:
        ensure_plan_access(container, session, plan_id, user_id)
        step = UpdatePlanStepStatusUseCase(
            container.plan_step_repository(session), container.transaction_manager(session)
        ).execute(plan_id, request.status)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DomainError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return PlanStepResponse.from_entity(step)
