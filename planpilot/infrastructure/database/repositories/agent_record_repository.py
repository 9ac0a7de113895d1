"""SQLAlchemy Agent 记录 Repository 实现

三类 Agent 的请求/结果表形状一致，公共逻辑放在 _AgentRecordRepository：
- save_request() / save_results(): 写入并 flush，失败转换为 ResultPersistenceError
- update_request_status(): 只更新 status 字段
- list_requests_by_plan(): 按创建时间倒序

子类提供 Assembler 方法与结果排序。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from planpilot.domain.entities.deployment import DeploymentRequest, DeploymentResult
from planpilot.domain.entities.execution import ExecutionRequest, ExecutionResult
from planpilot.domain.entities.research import ResearchRequest, ResearchResult
from planpilot.domain.exceptions import ResultPersistenceError
from planpilot.domain.value_objects.deployment_type import DeploymentType
from planpilot.domain.value_objects.execution_type import (
    DEPLOYABLE_EXECUTION_TYPES,
    ExecutionOutputType,
    ExecutionType,
)
from planpilot.domain.value_objects.request_status import RequestStatus
from planpilot.infrastructure.database.models import (
    DeploymentRequestModel,
    DeploymentResultModel,
    ExecutionRequestModel,
    ExecutionResultModel,
    ResearchRequestModel,
    ResearchResultModel,
)
from planpilot.infrastructure.database.repositories._timestamps import (
    to_aware_utc,
    to_naive_utc,
)


class _AgentRecordRepository(ABC):
    request_model: Any
    result_model: Any

    def __init__(self, session: Session):
        self.session = session

    @abstractmethod
    def _request_to_entity(self, model: Any) -> Any: ...

    @abstractmethod
    def _request_to_model(self, entity: Any) -> Any: ...

    @abstractmethod
    def _result_to_entity(self, model: Any) -> Any: ...

    @abstractmethod
    def _result_to_model(self, entity: Any) -> Any: ...

    def _result_order(self) -> tuple:
        return (self.result_model.created_at.asc(),)

    def save_request(self, request: Any) -> None:
        try:
            self.session.add(self._request_to_model(request))
            self.session.flush()
        except SQLAlchemyError as exc:
            raise ResultPersistenceError(self.request_model.__tablename__, str(exc)) from exc

    def update_request_status(self, request_id: str, status: RequestStatus) -> None:
        stmt = (
            update(self.request_model)
            .where(self.request_model.id == request_id)
            .values(status=RequestStatus(status).value)
        )
        try:
            self.session.execute(stmt)
            self.session.flush()
        except SQLAlchemyError as exc:
            raise ResultPersistenceError(self.request_model.__tablename__, str(exc)) from exc

    def save_results(self, results: list[Any]) -> None:
        try:
            self.session.add_all([self._result_to_model(result) for result in results])
            self.session.flush()
        except SQLAlchemyError as exc:
            raise ResultPersistenceError(self.result_model.__tablename__, str(exc)) from exc

    def list_requests_by_plan(self, plan_id: str) -> list[Any]:
        stmt = (
            select(self.request_model)
            .where(self.request_model.plan_id == plan_id)
            .order_by(self.request_model.created_at.desc())
        )
        return [self._request_to_entity(model) for model in self.session.scalars(stmt).all()]

    def list_results_by_request(self, request_id: str) -> list[Any]:
        stmt = (
            select(self.result_model)
            .where(self.result_model.request_id == request_id)
            .order_by(*self._result_order())
        )
        return [self._result_to_entity(model) for model in self.session.scalars(stmt).all()]


class SQLAlchemyResearchRepository(_AgentRecordRepository):
    request_model = ResearchRequestModel
    result_model = ResearchResultModel

    def _request_to_entity(self, model: ResearchRequestModel) -> ResearchRequest:
        return ResearchRequest(
            id=model.id,
            plan_id=model.plan_id,
            query=model.query,
            status=RequestStatus(model.status),
            created_at=to_aware_utc(model.created_at),
        )

    def _request_to_model(self, entity: ResearchRequest) -> ResearchRequestModel:
        return ResearchRequestModel(
            id=entity.id,
            plan_id=entity.plan_id,
            query=entity.query,
            status=entity.status.value,
            created_at=to_naive_utc(entity.created_at),
        )

    def _result_to_entity(self, model: ResearchResultModel) -> ResearchResult:
        return ResearchResult(
            id=model.id,
            request_id=model.request_id,
            title=model.title,
            content=model.content,
            summary=model.summary,
            source_url=model.source_url,
            relevance_score=model.relevance_score,
            created_at=to_aware_utc(model.created_at),
        )

    def _result_to_model(self, entity: ResearchResult) -> ResearchResultModel:
        return ResearchResultModel(
            id=entity.id,
            request_id=entity.request_id,
            source_url=entity.source_url,
            title=entity.title,
            content=entity.content,
            summary=entity.summary,
            relevance_score=entity.relevance_score,
            created_at=to_naive_utc(entity.created_at),
        )

    def _result_order(self) -> tuple:
        return (
            ResearchResultModel.relevance_score.desc(),
            ResearchResultModel.created_at.asc(),
        )


class SQLAlchemyExecutionRepository(_AgentRecordRepository):
    request_model = ExecutionRequestModel
    result_model = ExecutionResultModel

    def _request_to_entity(self, model: ExecutionRequestModel) -> ExecutionRequest:
        return ExecutionRequest(
            id=model.id,
            plan_id=model.plan_id,
            execution_type=ExecutionType(model.execution_type),
            instructions=model.instructions,
            status=RequestStatus(model.status),
            created_at=to_aware_utc(model.created_at),
        )

    def _request_to_model(self, entity: ExecutionRequest) -> ExecutionRequestModel:
        return ExecutionRequestModel(
            id=entity.id,
            plan_id=entity.plan_id,
            execution_type=entity.execution_type.value,
            instructions=entity.instructions,
            status=entity.status.value,
            created_at=to_naive_utc(entity.created_at),
        )

    def _result_to_entity(self, model: ExecutionResultModel) -> ExecutionResult:
        return ExecutionResult(
            id=model.id,
            request_id=model.request_id,
            output_type=ExecutionOutputType(model.output_type),
            content=model.content,
            file_path=model.file_path,
            success=model.success,
            error_message=model.error_message,
            created_at=to_aware_utc(model.created_at),
        )

    def _result_to_model(self, entity: ExecutionResult) -> ExecutionResultModel:
        return ExecutionResultModel(
            id=entity.id,
            request_id=entity.request_id,
            output_type=entity.output_type.value,
            content=entity.content,
            file_path=entity.file_path,
            success=entity.success,
            error_message=entity.error_message,
            created_at=to_naive_utc(entity.created_at),
        )

    def list_deployable_requests(self, plan_id: str) -> list[ExecutionRequest]:
        stmt = (
            select(ExecutionRequestModel)
            .where(
                ExecutionRequestModel.plan_id == plan_id,
                ExecutionRequestModel.status == RequestStatus.COMPLETED.value,
                ExecutionRequestModel.execution_type.in_(
                    [kind.value for kind in DEPLOYABLE_EXECUTION_TYPES]
                ),
            )
            .order_by(ExecutionRequestModel.created_at.desc())
        )
        return [self._request_to_entity(model) for model in self.session.scalars(stmt).all()]


class SQLAlchemyDeploymentRepository(_AgentRecordRepository):
    request_model = DeploymentRequestModel
    result_model = DeploymentResultModel

    def _request_to_entity(self, model: DeploymentRequestModel) -> DeploymentRequest:
        return DeploymentRequest(
            id=model.id,
            plan_id=model.plan_id,
            deployment_type=DeploymentType(model.deployment_type),
            configuration=dict(model.configuration or {}),
            execution_request_id=model.execution_request_id,
            status=RequestStatus(model.status),
            created_at=to_aware_utc(model.created_at),
        )

    def _request_to_model(self, entity: DeploymentRequest) -> DeploymentRequestModel:
        return DeploymentRequestModel(
            id=entity.id,
            plan_id=entity.plan_id,
            execution_request_id=entity.execution_request_id,
            deployment_type=entity.deployment_type.value,
            configuration=entity.configuration,
            status=entity.status.value,
            created_at=to_naive_utc(entity.created_at),
        )

    def _result_to_entity(self, model: DeploymentResultModel) -> DeploymentResult:
        return DeploymentResult(
            id=model.id,
            request_id=model.request_id,
            success=model.success,
            deployment_url=model.deployment_url,
            claim_url=model.claim_url,
            deploy_id=model.deploy_id,
            build_logs=model.build_logs,
            error_message=model.error_message,
            created_at=to_aware_utc(model.created_at),
        )

    def _result_to_model(self, entity: DeploymentResult) -> DeploymentResultModel:
        return DeploymentResultModel(
            id=entity.id,
            request_id=entity.request_id,
            deployment_url=entity.deployment_url,
            claim_url=entity.claim_url,
            deploy_id=entity.deploy_id,
            success=entity.success,
            error_message=entity.error_message,
            build_logs=entity.build_logs,
            created_at=to_naive_utc(entity.created_at),
        )
