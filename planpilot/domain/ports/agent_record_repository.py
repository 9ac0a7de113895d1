"""Agent 记录仓储 Port - 三类 Agent 的请求与结果持久化接口

每类 Agent 各有一对表（*_requests / *_results），接口形状一致：
- save_request(): 写入请求记录
- update_request_status(): 更新请求状态
- save_results(): 批量写入结果
- list_requests_by_plan(): 某个 Plan Step 的请求（按创建时间倒序）
- list_results_by_request(): 某个请求的结果

实现层不提交事务；Recorder 在每次写入后通过 TransactionManager 提交。
"""

from typing import Protocol

from planpilot.domain.entities.deployment import DeploymentRequest, DeploymentResult
from planpilot.domain.entities.execution import ExecutionRequest, ExecutionResult
from planpilot.domain.entities.research import ResearchRequest, ResearchResult
from planpilot.domain.value_objects.request_status import RequestStatus


class ResearchRepository(Protocol):
    def save_request(self, request: ResearchRequest) -> None: ...

    def update_request_status(self, request_id: str, status: RequestStatus) -> None: ...

    def save_results(self, results: list[ResearchResult]) -> None: ...

    def list_requests_by_plan(self, plan_id: str) -> list[ResearchRequest]: ...

    def list_results_by_request(self, request_id: str) -> list[ResearchResult]:
        """按 relevance_score 降序返回"""
        ...


class ExecutionRepository(Protocol):
    def save_request(self, request: ExecutionRequest) -> None: ...

    def update_request_status(self, request_id: str, status: RequestStatus) -> None: ...

    def save_results(self, results: list[ExecutionResult]) -> None: ...

    def list_requests_by_plan(self, plan_id: str) -> list[ExecutionRequest]: ...

    def list_results_by_request(self, request_id: str) -> list[ExecutionResult]:
        """按创建时间升序返回"""
        ...

    def list_deployable_requests(self, plan_id: str) -> list[ExecutionRequest]:
        """已完成的 code_generation / file_creation 请求（按创建时间倒序）"""
        ...


class DeploymentRepository(Protocol):
    def save_request(self, request: DeploymentRequest) -> None: ...

    def update_request_status(self, request_id: str, status: RequestStatus) -> None: ...

    def save_results(self, results: list[DeploymentResult]) -> None: ...

    def list_requests_by_plan(self, plan_id: str) -> list[DeploymentRequest]: ...

    def list_results_by_request(self, request_id: str) -> list[DeploymentResult]:
        """按创建时间升序返回"""
        ...
