"""ExecutionRecorder - 执行 Agent

失败时写入一条 output_type=error 的结果（best-effort），返回 FAILED。
"""

from __future__ import annotations

from dataclasses import dataclass

from planpilot.application.services.agent_recorder import (
    AgentOutcome,
    AgentOutcomeKind,
    AgentRecorder,
)
from planpilot.domain.entities.execution import ExecutionRequest, ExecutionResult
from planpilot.domain.services.content.execution_templates import perform_execution
from planpilot.domain.value_objects.agent_domain import AgentDomain
from planpilot.domain.value_objects.execution_type import ExecutionType

EXECUTION_LATENCY_MS: dict[ExecutionType, int] = {
    ExecutionType.CODE_GENERATION: 1500,
    ExecutionType.SCRIPT_EXECUTION: 2000,
    ExecutionType.API_CALL: 1000,
    ExecutionType.FILE_CREATION: 1500,
    ExecutionType.ENVIRONMENT_SETUP: 3000,
}
DEFAULT_EXECUTION_LATENCY_MS = 1500


@dataclass(frozen=True)
class ExecutionInput:
    execution_type: ExecutionType
    instructions: str


class ExecutionRecorder(AgentRecorder[ExecutionInput, ExecutionRequest, ExecutionResult]):
    domain = AgentDomain.EXECUTION

    def _build_request(self, plan_id: str, payload: ExecutionInput) -> ExecutionRequest:
        return ExecutionRequest.create(plan_id, payload.execution_type, payload.instructions)

    def _latency_ms(self, payload: ExecutionInput) -> int:
        return EXECUTION_LATENCY_MS.get(payload.execution_type, DEFAULT_EXECUTION_LATENCY_MS)

    def _generate(
        self, request: ExecutionRequest, payload: ExecutionInput
    ) -> list[ExecutionResult]:
        drafts = perform_execution(request.execution_type, request.instructions, rng=self._rng)
        return [ExecutionResult.from_draft(request.id, draft) for draft in drafts]

    def _recover(
        self,
        request: ExecutionRequest,
        payload: ExecutionInput,
        error: Exception,
        generated: list[ExecutionResult] | None,
    ) -> AgentOutcome[ExecutionRequest, ExecutionResult]:
        error_result = ExecutionResult.error(request.id, str(error))
        saved = self._persist_best_effort([error_result])
        if generated is not None and not saved:
            results = generated
        else:
            results = [error_result]
        return AgentOutcome(
            kind=AgentOutcomeKind.FAILED, request=request, results=results, error=str(error)
        )
