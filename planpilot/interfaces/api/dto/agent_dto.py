"""Agent DTO - 研究/执行/部署请求与结果

- *Body: 调用 Agent 的请求体
- *RequestResponse / *ResultResponse: 请求与结果记录
- *OutcomeResponse: 一次调用的结果（kind = ok / degraded / failed）
- *HistoryResponse: 某个 Plan Step 的调用历史
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from planpilot.domain.value_objects.auto_start_preferences import ResearchDepth
from planpilot.domain.value_objects.deployment_type import DeploymentType
from planpilot.domain.value_objects.execution_type import ExecutionType

# ==================== 请求体 ====================


class ResearchBody(BaseModel):
    query: str = Field(..., description="研究查询")
    depth: ResearchDepth = ResearchDepth.DETAILED


class ExecutionBody(BaseModel):
    execution_type: ExecutionType
    instructions: str


class DeploymentBody(BaseModel):
    deployment_type: DeploymentType
    configuration: dict[str, Any] = Field(default_factory=dict)
    execution_request_id: str | None = None


# ==================== 研究 ====================


class ResearchRequestResponse(BaseModel):
    id: str
    plan_id: str
    query: str
    status: str
    created_at: datetime

    @classmethod
    def from_entity(cls, request) -> "ResearchRequestResponse":
        return cls(
            id=request.id,
            plan_id=request.plan_id,
            query=request.query,
            status=request.status.value,
            created_at=request.created_at,
        )


class ResearchResultResponse(BaseModel):
    id: str
    request_id: str
    title: str
    content: str
    summary: str | None = None
    source_url: str | None = None
    relevance_score: int
    created_at: datetime

    @classmethod
    def from_entity(cls, result) -> "ResearchResultResponse":
        return cls(
            id=result.id,
            request_id=result.request_id,
            title=result.title,
            content=result.content,
            summary=result.summary,
            source_url=result.source_url,
            relevance_score=result.relevance_score,
            created_at=result.created_at,
        )


class ResearchOutcomeResponse(BaseModel):
    kind: str
    error: str | None = None
    request: ResearchRequestResponse
    results: list[ResearchResultResponse]

    @classmethod
    def from_outcome(cls, outcome) -> "ResearchOutcomeResponse":
        return cls(
            kind=outcome.kind.value,
            error=outcome.error,
            request=ResearchRequestResponse.from_entity(outcome.request),
            results=[ResearchResultResponse.from_entity(result) for result in outcome.results],
        )


class ResearchHistoryEntry(BaseModel):
    request: ResearchRequestResponse
    results: list[ResearchResultResponse]


# ==================== 执行 ====================


class ExecutionRequestResponse(BaseModel):
    id: str
    plan_id: str
    execution_type: str
    instructions: str
    status: str
    created_at: datetime

    @classmethod
    def from_entity(cls, request) -> "ExecutionRequestResponse":
        return cls(
            id=request.id,
            plan_id=request.plan_id,
            execution_type=request.execution_type.value,
            instructions=request.instructions,
            status=request.status.value,
            created_at=request.created_at,
        )


class ExecutionResultResponse(BaseModel):
    id: str
    request_id: str
    output_type: str
    content: str
    file_path: str | None = None
    success: bool
    error_message: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, result) -> "ExecutionResultResponse":
        return cls(
            id=result.id,
            request_id=result.request_id,
            output_type=result.output_type.value,
            content=result.content,
            file_path=result.file_path,
            success=result.success,
            error_message=result.error_message,
            created_at=result.created_at,
        )


class ExecutionOutcomeResponse(BaseModel):
    kind: str
    error: str | None = None
    request: ExecutionRequestResponse
    results: list[ExecutionResultResponse]

    @classmethod
    def from_outcome(cls, outcome) -> "ExecutionOutcomeResponse":
        return cls(
            kind=outcome.kind.value,
            error=outcome.error,
            request=ExecutionRequestResponse.from_entity(outcome.request),
            results=[ExecutionResultResponse.from_entity(result) for result in outcome.results],
        )


class ExecutionHistoryEntry(BaseModel):
    request: ExecutionRequestResponse
    results: list[ExecutionResultResponse]


# ==================== 部署 ====================


class DeploymentRequestResponse(BaseModel):
    id: str
    plan_id: str
    deployment_type: str
    configuration: dict[str, Any]
    execution_request_id: str | None = None
    status: str
    created_at: datetime

    @classmethod
    def from_entity(cls, request) -> "DeploymentRequestResponse":
        return cls(
            id=request.id,
            plan_id=request.plan_id,
            deployment_type=request.deployment_type.value,
            configuration=request.configuration,
            execution_request_id=request.execution_request_id,
            status=request.status.value,
            created_at=request.created_at,
        )


class DeploymentResultResponse(BaseModel):
    id: str
    request_id: str
    success: bool
    deployment_url: str | None = None
    claim_url: str | None = None
    deploy_id: str | None = None
    build_logs: str | None = None
    error_message: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, result) -> "DeploymentResultResponse":
        return cls(
            id=result.id,
            request_id=result.request_id,
            success=result.success,
            deployment_url=result.deployment_url,
            claim_url=result.claim_url,
            deploy_id=result.deploy_id,
            build_logs=result.build_logs,
            error_message=result.error_message,
            created_at=result.created_at,
        )


class DeploymentOutcomeResponse(BaseModel):
    kind: str
    error: str | None = None
    request: DeploymentRequestResponse
    results: list[DeploymentResultResponse]

    @classmethod
    def from_outcome(cls, outcome) -> "DeploymentOutcomeResponse":
        return cls(
            kind=outcome.kind.value,
            error=outcome.error,
            request=DeploymentRequestResponse.from_entity(outcome.request),
            results=[DeploymentResultResponse.from_entity(result) for result in outcome.results],
        )


class DeploymentHistoryEntry(BaseModel):
    request: DeploymentRequestResponse
    results: list[DeploymentResultResponse]


class DeploymentProviderResponse(BaseModel):
    type: str
    name: str
    description: str
    supports_custom_domain: bool
    build_command: str
    publish_dir: str
