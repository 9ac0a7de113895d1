"""GetAgentHistoryUseCase - 某个 Plan Step 的 Agent 调用历史

- 请求按创建时间倒序
- 研究结果按相关度降序，执行/部署结果按创建时间升序
- list_deployable_outputs(): 已完成的 code_generation / file_creation 请求及其成功结果
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from planpilot.domain.entities.execution import ExecutionRequest, ExecutionResult
from planpilot.domain.ports.agent_record_repository import ExecutionRepository
from planpilot.domain.ports.goal_repository import PlanStepRepository

RequestT = TypeVar("RequestT")
ResultT = TypeVar("ResultT")


@dataclass
class AgentHistoryEntry(Generic[RequestT, ResultT]):
    request: RequestT
    results: list[ResultT] = field(default_factory=list)


class GetAgentHistoryUseCase:
    """repository 可以是 Research/Execution/DeploymentRepository 中的任意一个"""

    def __init__(self, plan_step_repository: PlanStepRepository, repository: Any):
        self.plan_step_repository = plan_step_repository
        self.repository = repository

    def execute(self, plan_id: str) -> list[AgentHistoryEntry]:
        """抛出：NotFoundError（Plan Step 不存在）"""
        self.plan_step_repository.get_by_id(plan_id)
        return [
            AgentHistoryEntry(
                request=request,
                results=self.repository.list_results_by_request(request.id),
            )
            for request in self.repository.list_requests_by_plan(plan_id)
        ]


def list_deployable_outputs(
    execution_repository: ExecutionRepository, plan_id: str
) -> list[AgentHistoryEntry[ExecutionRequest, ExecutionResult]]:
    entries = []
    for request in execution_repository.list_deployable_requests(plan_id):
        results = [
            result
            for result in execution_repository.list_results_by_request(request.id)
            if result.success
        ]
        entries.append(AgentHistoryEntry(request=request, results=results))
    return entries
