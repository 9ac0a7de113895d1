"""DeploymentRecorder - 部署 Agent

部署结果 success=False 时请求状态为 FAILED。
失败时写入一条错误结果（best-effort），返回 FAILED。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from planpilot.application.services.agent_recorder import (
    AgentOutcome,
    AgentOutcomeKind,
    AgentRecorder,
)
from planpilot.domain.entities.deployment import DeploymentRequest, DeploymentResult
from planpilot.domain.services.content.deployment_templates import perform_deployment
from planpilot.domain.value_objects.agent_domain import AgentDomain
from planpilot.domain.value_objects.deployment_type import DeploymentType
from planpilot.domain.value_objects.request_status import RequestStatus

DEPLOYMENT_LATENCY_MS: dict[DeploymentType, int] = {
    DeploymentType.NETLIFY_STATIC: 3000,
    DeploymentType.VERCEL_STATIC: 2500,
    DeploymentType.GITHUB_PAGES: 4000,
    DeploymentType.CUSTOM_HOSTING: 3500,
}
DEFAULT_DEPLOYMENT_LATENCY_MS = 3000


@dataclass(frozen=True)
class DeploymentInput:
    deployment_type: DeploymentType
    configuration: dict[str, Any] = field(default_factory=dict)
    execution_request_id: str | None = None


class DeploymentRecorder(AgentRecorder[DeploymentInput, DeploymentRequest, DeploymentResult]):
    domain = AgentDomain.DEPLOYMENT

    def _build_request(self, plan_id: str, payload: DeploymentInput) -> DeploymentRequest:
        return DeploymentRequest.create(
            plan_id,
            payload.deployment_type,
            payload.configuration,
            payload.execution_request_id,
        )

    def _latency_ms(self, payload: DeploymentInput) -> int:
        return DEPLOYMENT_LATENCY_MS.get(payload.deployment_type, DEFAULT_DEPLOYMENT_LATENCY_MS)

    def _generate(
        self, request: DeploymentRequest, payload: DeploymentInput
    ) -> list[DeploymentResult]:
        draft = perform_deployment(request.deployment_type, request.configuration, rng=self._rng)
        return [DeploymentResult.from_draft(request.id, draft)]

    def _final_status(self, results: list[DeploymentResult]) -> RequestStatus:
        if all(result.success for result in results):
            return RequestStatus.COMPLETED
        return RequestStatus.FAILED

    def _failure_message(self, results: list[DeploymentResult]) -> str | None:
        for result in results:
            if not result.success:
                return result.error_message or "Deployment failed"
        return None

    def _recover(
        self,
        request: DeploymentRequest,
        payload: DeploymentInput,
        error: Exception,
        generated: list[DeploymentResult] | None,
    ) -> AgentOutcome[DeploymentRequest, DeploymentResult]:
        error_result = DeploymentResult.error(request.id, str(error))
        saved = self._persist_best_effort([error_result])
        if generated is not None and not saved:
            results = generated
        else:
            results = [error_result]
        return AgentOutcome(
            kind=AgentOutcomeKind.FAILED, request=request, results=results, error=str(error)
        )
