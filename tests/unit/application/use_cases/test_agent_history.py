"""测试：Agent 调用历史与可部署输出"""

from unittest.mock import Mock

import pytest

from planpilot.application.use_cases.get_agent_history import (
    GetAgentHistoryUseCase,
    list_deployable_outputs,
)
from planpilot.domain.entities.execution import (
    ExecutionDraft,
    ExecutionRequest,
    ExecutionResult,
)
from planpilot.domain.exceptions import NotFoundError
from planpilot.domain.value_objects.execution_type import ExecutionOutputType, ExecutionType


def _request() -> ExecutionRequest:
    return ExecutionRequest.create("plan-1", ExecutionType.CODE_GENERATION, "react")


class TestGetAgentHistoryUseCase:
    def test_pairs_requests_with_results(self):
        plan_step_repository = Mock()
        repository = Mock()
        newer, older = _request(), _request()
        result = ExecutionResult.error(newer.id, "boom")
        repository.list_requests_by_plan.return_value = [newer, older]
        repository.list_results_by_request.side_effect = lambda request_id: (
            [result] if request_id == newer.id else []
        )

        entries = GetAgentHistoryUseCase(plan_step_repository, repository).execute("plan-1")

        plan_step_repository.get_by_id.assert_called_once_with("plan-1")
        assert [entry.request for entry in entries] == [newer, older]
        assert entries[0].results == [result]
        assert entries[1].results == []

    def test_unknown_plan(self):
        plan_step_repository = Mock()
        plan_step_repository.get_by_id.side_effect = NotFoundError("PlanStep", "missing")

        with pytest.raises(NotFoundError):
            GetAgentHistoryUseCase(plan_step_repository, Mock()).execute("missing")


class TestListDeployableOutputs:
    def test_only_successful_results_are_kept(self):
        repository = Mock()
        request = _request()
        code = ExecutionResult.from_draft(
            request.id, ExecutionDraft(output_type=ExecutionOutputType.CODE, content="x")
        )
        failure = ExecutionResult.error(request.id, "boom")
        repository.list_deployable_requests.return_value = [request]
        repository.list_results_by_request.return_value = [code, failure]

        entries = list_deployable_outputs(repository, "plan-1")

        assert len(entries) == 1
        assert entries[0].request is request
        assert entries[0].results == [code]
