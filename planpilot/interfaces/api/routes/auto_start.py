"""Auto-start 路由 - "一键启动全部任务"

- POST /api/goals/{goal_id}/auto-start - 后台启动（202）
- GET  /api/goals/{goal_id}/auto-start - 查询最新状态
- POST /api/goals/{goal_id}/auto-start/stop - 请求停止

后台任务使用独立的 Session，请求结束后不受影响。
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from planpilot.application.services.workflow_runner import (
    CancellationToken,
    RunnerState,
    WorkflowRunner,
)
from planpilot.application.use_cases.auto_start_workflow import (
    AutoStartWorkflowUseCase,
    load_goal_steps,
)
from planpilot.application.use_cases.get_goal_plan import get_owned_goal
from planpilot.domain.exceptions import DomainError, NotFoundError
from planpilot.infrastructure.database.engine import get_db_session
from planpilot.interfaces.api.container import ApiContainer
from planpilot.interfaces.api.dependencies.agents import build_recorders
from planpilot.interfaces.api.dependencies.auto_start import get_auto_start_registry
from planpilot.interfaces.api.dependencies.container import get_container
from planpilot.interfaces.api.dependencies.current_user import get_current_user_id
from planpilot.interfaces.api.dto import AutoStartRequest, RunnerStateResponse
from planpilot.interfaces.api.services.auto_start_registry import (
    AutoStartConflictError,
    AutoStartRegistry,
)

router = APIRouter(prefix="/goals/{goal_id}/auto-start", tags=["Auto Start"])


@router.post("", response_model=RunnerStateResponse, status_code=status.HTTP_202_ACCEPTED)
async def start_auto_run(
    goal_id: str,
    request: AutoStartRequest,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
    registry: AutoStartRegistry = Depends(get_auto_start_registry),
) -> RunnerStateResponse:
    try:
        preferences = request.to_preferences()
        steps = load_goal_steps(
            container.goal_repository(session),
            container.plan_step_repository(session),
            goal_id,
            user_id,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DomainError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    background_session = container.session_factory()
    research, execution, deployment = build_recorders(container, background_session)

    def runner_factory(on_transition) -> WorkflowRunner:
        return WorkflowRunner(
            research,
            execution,
            deployment,
            sleep=container.runner_sleep,
            on_transition=on_transition,
        )

    async def run(runner: WorkflowRunner, token: CancellationToken) -> RunnerState:
        try:
            use_case = AutoStartWorkflowUseCase(
                container.goal_repository(background_session),
                container.plan_step_repository(background_session),
                runner,
            )
            return await use_case.execute(goal_id, user_id, preferences, token, steps=steps)
        finally:
            background_session.close()

    try:
        state = registry.start(goal_id, runner_factory, run)
    except AutoStartConflictError as exc:
        background_session.close()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return RunnerStateResponse.from_state(goal_id, state)


@router.get("", response_model=RunnerStateResponse)
def auto_run_status(
    goal_id: str,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
    registry: AutoStartRegistry = Depends(get_auto_start_registry),
) -> RunnerStateResponse:
    try:
        get_owned_goal(container.goal_repository(session), goal_id, user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return RunnerStateResponse.from_state(goal_id, registry.state(goal_id) or RunnerState())


@router.post("/stop", response_model=RunnerStateResponse)
def stop_auto_run(
    goal_id: str,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
    registry: AutoStartRegistry = Depends(get_auto_start_registry),
) -> RunnerStateResponse:
    try:
        get_owned_goal(container.goal_repository(session), goal_id, user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return RunnerStateResponse.from_state(goal_id, registry.stop(goal_id) or RunnerState())
