"""ResearchRecorder - 研究 Agent

主路径失败时不返回错误结果，而是生成关键词兜底结果（DEGRADED）。
"""

from __future__ import annotations

from dataclasses import dataclass

from planpilot.application.services.agent_recorder import (
    AgentOutcome,
    AgentOutcomeKind,
    AgentRecorder,
)
from planpilot.domain.entities.research import ResearchRequest, ResearchResult
from planpilot.domain.services.content.research_templates import (
    compose_research_results,
    fallback_research_results,
)
from planpilot.domain.value_objects.agent_domain import AgentDomain
from planpilot.domain.value_objects.auto_start_preferences import ResearchDepth

RESEARCH_LATENCY_MS = 2000


@dataclass(frozen=True)
class ResearchInput:
    query: str
    depth: ResearchDepth = ResearchDepth.DETAILED


class ResearchRecorder(AgentRecorder[ResearchInput, ResearchRequest, ResearchResult]):
    domain = AgentDomain.RESEARCH

    def _build_request(self, plan_id: str, payload: ResearchInput) -> ResearchRequest:
        return ResearchRequest.create(plan_id, payload.query)

    def _latency_ms(self, payload: ResearchInput) -> int:
        return RESEARCH_LATENCY_MS

    def _generate(self, request: ResearchRequest, payload: ResearchInput) -> list[ResearchResult]:
        drafts = compose_research_results(payload.query, payload.depth)
        return [ResearchResult.from_draft(request.id, draft) for draft in drafts]

    def _recover(
        self,
        request: ResearchRequest,
        payload: ResearchInput,
        error: Exception,
        generated: list[ResearchResult] | None,
    ) -> AgentOutcome[ResearchRequest, ResearchResult]:
        fallback = [
            ResearchResult.from_draft(request.id, draft)
            for draft in fallback_research_results(payload.query)
        ]
        self._persist_best_effort(fallback)
        return AgentOutcome(
            kind=AgentOutcomeKind.DEGRADED,
            request=request,
            results=fallback,
            error=str(error),
        )
