"""Deployment 实体 - 部署请求与部署结果

业务定义：
- DeploymentRequest: deployment_type + configuration，可关联一次执行请求
- DeploymentResult: 站点地址、认领地址、构建日志、是否成功
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from planpilot.domain.entities.agent_request import RequestLifecycleMixin
from planpilot.domain.exceptions import DomainError
from planpilot.domain.value_objects.deployment_type import DeploymentType
from planpilot.domain.value_objects.request_status import RequestStatus


@dataclass
class DeploymentRequest(RequestLifecycleMixin):
    id: str
    plan_id: str
    deployment_type: DeploymentType
    configuration: dict[str, Any]
    execution_request_id: str | None = None
    status: RequestStatus = RequestStatus.IN_PROGRESS
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        plan_id: str,
        deployment_type: DeploymentType,
        configuration: dict[str, Any] | None = None,
        execution_request_id: str | None = None,
    ) -> "DeploymentRequest":
        if not plan_id or not plan_id.strip():
            raise DomainError("plan_id 不能为空")
        return cls(
            id=str(uuid4()),
            plan_id=plan_id,
            deployment_type=DeploymentType(deployment_type),
            configuration=dict(configuration or {}),
            execution_request_id=execution_request_id,
        )


@dataclass(frozen=True)
class DeploymentDraft:
    """模板生成的部署结果草稿"""

    success: bool
    deployment_url: str | None = None
    claim_url: str | None = None
    deploy_id: str | None = None
    build_logs: str | None = None
    error_message: str | None = None


@dataclass
class DeploymentResult:
    id: str
    request_id: str
    success: bool
    deployment_url: str | None
    claim_url: str | None
    deploy_id: str | None
    build_logs: str | None
    error_message: str | None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_draft(cls, request_id: str, draft: DeploymentDraft) -> "DeploymentResult":
        return cls(
            id=str(uuid4()),
            request_id=request_id,
            success=draft.success,
            deployment_url=draft.deployment_url,
            claim_url=draft.claim_url,
            deploy_id=draft.deploy_id,
            build_logs=draft.build_logs,
            error_message=draft.error_message,
        )

    @classmethod
    def error(cls, request_id: str, message: str) -> "DeploymentResult":
        return cls.from_draft(request_id, DeploymentDraft(success=False, error_message=message))
