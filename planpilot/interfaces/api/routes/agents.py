"""Agents 路由 - 研究 / 执行 / 部署

- POST /api/plans/{plan_id}/research|execution|deployment - 调用模拟 Agent
- GET  /api/plans/{plan_id}/research|execution|deployment - 调用历史
- GET  /api/plans/{plan_id}/deployable-outputs - 可部署的执行结果
- GET  /api/deployment-providers - 部署目标目录

异常处理：
- 404: Plan Step 不存在或不属于调用方
- 400: 输入不合法
- 502: 请求记录写入失败（AgentInvocationError）
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from planpilot.application.services.deployment_recorder import DeploymentInput
from planpilot.application.services.execution_recorder import ExecutionInput
from planpilot.application.services.research_recorder import ResearchInput
from planpilot.application.use_cases.get_agent_history import (
    GetAgentHistoryUseCase,
    list_deployable_outputs,
)
from planpilot.domain.exceptions import AgentInvocationError, DomainError, NotFoundError
from planpilot.domain.services.content.deployment_templates import DEPLOYMENT_PROVIDERS
from planpilot.infrastructure.database.engine import get_db_session
from planpilot.interfaces.api.container import ApiContainer
from planpilot.interfaces.api.dependencies.agents import build_recorders, ensure_plan_access
from planpilot.interfaces.api.dependencies.container import get_container
from planpilot.interfaces.api.dependencies.current_user import get_current_user_id
from planpilot.interfaces.api.dto import (
    DeploymentBody,
    DeploymentHistoryEntry,
    DeploymentOutcomeResponse,
    DeploymentProviderResponse,
    DeploymentRequestResponse,
    DeploymentResultResponse,
    ExecutionBody,
    ExecutionHistoryEntry,
    ExecutionOutcomeResponse,
    ExecutionRequestResponse,
    ExecutionResultResponse,
    ResearchBody,
    ResearchHistoryEntry,
    ResearchOutcomeResponse,
    ResearchRequestResponse,
    ResearchResultResponse,
)

router = APIRouter(tags=["Agents"])


def _check_plan(container: ApiContainer, session: Session, plan_id: str, user_id: str) -> None:
    try:
        ensure_plan_access(container, session, plan_id, user_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


def _invocation_error(exc: Exception) -> HTTPException:
    if isinstance(exc, AgentInvocationError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


# ==================== 研究 ====================


@router.post("/plans/{plan_id}/research", response_model=ResearchOutcomeResponse)
async def run_research(
    plan_id: str,
    body: ResearchBody,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> ResearchOutcomeResponse:
    _check_plan(container, session, plan_id, user_id)
    research, _, _ = build_recorders(container, session)
    try:
        outcome = await research.run(plan_id, ResearchInput(query=body.query, depth=body.depth))
    except DomainError as exc:
        raise _invocation_error(exc) from exc
    return ResearchOutcomeResponse.from_outcome(outcome)


@router.get("/plans/{plan_id}/research", response_model=list[ResearchHistoryEntry])
def research_history(
    plan_id: str,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> list[ResearchHistoryEntry]:
    _check_plan(container, session, plan_id, user_id)
    entries = GetAgentHistoryUseCase(
        container.plan_step_repository(session), container.research_repository(session)
    ).execute(plan_id)
    return [
        ResearchHistoryEntry(
            request=ResearchRequestResponse.from_entity(entry.request),
            results=[ResearchResultResponse.from_entity(result) for result in entry.results],
        )
        for entry in entries
    ]


# ==================== 执行 ====================


@router.post("/plans/{plan_id}/execution", response_model=ExecutionOutcomeResponse)
async def run_execution(
    plan_id: str,
    body: ExecutionBody,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> ExecutionOutcomeResponse:
    _check_plan(container, session, plan_id, user_id)
    _, execution, _ = build_recorders(container, session)
    try:
        outcome = await execution.run(
            plan_id,
            ExecutionInput(execution_type=body.execution_type, instructions=body.instructions),
        )
    except DomainError as exc:
        raise _invocation_error(exc) from exc
    return ExecutionOutcomeResponse.from_outcome(outcome)


@router.get("/plans/{plan_id}/execution", response_model=list[ExecutionHistoryEntry])
def execution_history(
    plan_id: str,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> list[ExecutionHistoryEntry]:
    _check_plan(container, session, plan_id, user_id)
    entries = GetAgentHistoryUseCase(
        container.plan_step_repository(session), container.execution_repository(session)
    ).execute(plan_id)
    return [
        ExecutionHistoryEntry(
            request=ExecutionRequestResponse.from_entity(entry.request),
            results=[ExecutionResultResponse.from_entity(result) for result in entry.results],
        )
        for entry in entries
    ]


@router.get("/plans/{plan_id}/deployable-outputs", response_model=list[ExecutionHistoryEntry])
def deployable_outputs(
    plan_id: str,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> list[ExecutionHistoryEntry]:
    _check_plan(container, session, plan_id, user_id)
    entries = list_deployable_outputs(container.execution_repository(session), plan_id)
    return [
        ExecutionHistoryEntry(
            request=ExecutionRequestResponse.from_entity(entry.request),
            results=[ExecutionResultResponse.from_entity(result) for result in entry.results],
        )
        for entry in entries
    ]


# ==================== 部署 ====================


@router.post("/plans/{plan_id}/deployment", response_model=DeploymentOutcomeResponse)
async def run_deployment(
    plan_id: str,
    body: DeploymentBody,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> DeploymentOutcomeResponse:
    _check_plan(container, session, plan_id, user_id)
    _, _, deployment = build_recorders(container, session)
    try:
        outcome = await deployment.run(
            plan_id,
            DeploymentInput(
                deployment_type=body.deployment_type,
                configuration=body.configuration,
                execution_request_id=body.execution_request_id,
            ),
        )
    except DomainError as exc:
        raise _invocation_error(exc) from exc
    return DeploymentOutcomeResponse.from_outcome(outcome)


@router.get("/plans/{plan_id}/deployment", response_model=list[DeploymentHistoryEntry])
def deployment_history(
    plan_id: str,
    container: ApiContainer = Depends(get_container),
    session: Session = Depends(get_db_session),
    user_id: str = Depends(get_current_user_id),
) -> list[DeploymentHistoryEntry]:
    _check_plan(container, session, plan_id, user_id)
    entries = GetAgentHistoryUseCase(
        container.plan_step_repository(session), container.deployment_repository(session)
    ).execute(plan_id)
    return [
        DeploymentHistoryEntry(
            request=DeploymentRequestResponse.from_entity(entry.request),
            results=[DeploymentResultResponse.from_entity(result) for result in entry.results],
        )
        for entry in entries
    ]


@router.get("/deployment-providers", response_model=list[DeploymentProviderResponse])
def deployment_providers() -> list[DeploymentProviderResponse]:
    return [
        DeploymentProviderResponse(
            type=kind.value,
            name=provider.name,
            description=provider.description,
            supports_custom_domain=provider.supports_custom_domain,
            build_command=provider.build_command,
            publish_dir=provider.publish_dir,
        )
        for kind, provider in DEPLOYMENT_PROVIDERS.items()
    ]
