"""Research / Execution / Deployment Repository 单元测试

测试原则:
- 使用 SQLite 内存数据库（开启外键）
- 请求必须关联已存在的 Plan Step
"""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import delete, func, select

from planpilot.domain.entities.deployment import (
    DeploymentDraft,
    DeploymentRequest,
    DeploymentResult,
)
from planpilot.domain.entities.execution import (
    ExecutionDraft,
    ExecutionRequest,
    ExecutionResult,
)
from planpilot.domain.entities.goal import Goal
from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.entities.research import ResearchDraft, ResearchRequest, ResearchResult
from planpilot.domain.exceptions import ResultPersistenceError
from planpilot.domain.value_objects.deployment_type import DeploymentType
from planpilot.domain.value_objects.execution_type import ExecutionOutputType, ExecutionType
from planpilot.domain.value_objects.request_status import RequestStatus
from planpilot.infrastructure.database.models import PlanStepModel, ResearchResultModel
from planpilot.infrastructure.database.repositories.agent_record_repository import (
    SQLAlchemyDeploymentRepository,
    SQLAlchemyExecutionRepository,
    SQLAlchemyResearchRepository,
    _AgentRecordRepository,
)
from planpilot.infrastructure.database.repositories.goal_repository import (
    SQLAlchemyGoalRepository,
    SQLAlchemyPlanStepRepository,
)

# ==================== Fixtures ====================


@pytest.fixture
def plan_step(db_session) -> PlanStep:
    goal = Goal.create("user-1", "Build a portfolio site")
    SQLAlchemyGoalRepository(db_session).save(goal)
    step = PlanStep.create(goal.id, "Implementation Phase", None, 1)
    SQLAlchemyPlanStepRepository(db_session).save(step)
    return step


@pytest.fixture
def research_repo(db_session):
    return SQLAlchemyResearchRepository(db_session)


@pytest.fixture
def execution_repo(db_session):
    return SQLAlchemyExecutionRepository(db_session)


@pytest.fixture
def deployment_repo(db_session):
    return SQLAlchemyDeploymentRepository(db_session)


def _execution(plan_id: str, kind: ExecutionType, created_at: datetime) -> ExecutionRequest:
    request = ExecutionRequest.create(plan_id, kind, "react component")
    request.created_at = created_at
    return request


# ==================== Research ====================


class TestResearchRepository:
    def test_save_request_and_update_status(self, research_repo, plan_step):
        request = ResearchRequest.create(plan_step.id, "react hooks")
        research_repo.save_request(request)

        research_repo.update_request_status(request.id, RequestStatus.COMPLETED)

        [loaded] = research_repo.list_requests_by_plan(plan_step.id)
        assert loaded.id == request.id
        assert loaded.status == RequestStatus.COMPLETED
        assert loaded.created_at.tzinfo is not None

    def test_results_ordered_by_relevance(self, research_repo, plan_step):
        request = ResearchRequest.create(plan_step.id, "react hooks")
        research_repo.save_request(request)
        research_repo.save_results(
            [
                ResearchResult.from_draft(
                    request.id, ResearchDraft(title=f"r{score}", content="c", relevance_score=score)
                )
                for score in (6, 9, 7)
            ]
        )

        results = research_repo.list_results_by_request(request.id)

        assert [result.relevance_score for result in results] == [9, 7, 6]

    def test_requests_newest_first(self, research_repo, plan_step):
        base = datetime(2026, 1, 1, tzinfo=UTC)
        older = ResearchRequest.create(plan_step.id, "first")
        older.created_at = base
        newer = ResearchRequest.create(plan_step.id, "second")
        newer.created_at = base + timedelta(minutes=5)
        research_repo.save_request(older)
        research_repo.save_request(newer)

        requests = research_repo.list_requests_by_plan(plan_step.id)

        assert [request.query for request in requests] == ["second", "first"]

    def test_request_for_unknown_plan_raises(self, research_repo):
        request = ResearchRequest.create("no-such-plan", "react hooks")

        with pytest.raises(ResultPersistenceError) as exc_info:
            research_repo.save_request(request)

        assert exc_info.value.table == "research_requests"

    def test_deleting_plan_step_removes_records(self, db_session, research_repo, plan_step):
        request = ResearchRequest.create(plan_step.id, "react hooks")
        research_repo.save_request(request)
        research_repo.save_results(
            [ResearchResult.from_draft(request.id, ResearchDraft(title="t", content="c"))]
        )
        db_session.commit()

        db_session.execute(delete(PlanStepModel).where(PlanStepModel.id == plan_step.id))
        db_session.commit()
        db_session.expunge_all()

        assert research_repo.list_requests_by_plan(plan_step.id) == []
        assert db_session.scalar(select(func.count()).select_from(ResearchResultModel)) == 0


# ==================== Execution ====================


class TestExecutionRepository:
    def test_results_keep_file_paths(self, execution_repo, plan_step):
        request = ExecutionRequest.create(plan_step.id, ExecutionType.FILE_CREATION, "todo app")
        execution_repo.save_request(request)
        execution_repo.save_results(
            [
                ExecutionResult.from_draft(
                    request.id,
                    ExecutionDraft(
                        output_type=ExecutionOutputType.FILE,
                        content="{}",
                        file_path="generated/config.json",
                    ),
                )
            ]
        )

        [result] = execution_repo.list_results_by_request(request.id)

        assert result.output_type == ExecutionOutputType.FILE
        assert result.file_path == "generated/config.json"
        assert result.success is True

    def test_deployable_requests(self, execution_repo, plan_step):
        base = datetime(2026, 1, 1, tzinfo=UTC)
        code = _execution(plan_step.id, ExecutionType.CODE_GENERATION, base)
        files = _execution(plan_step.id, ExecutionType.FILE_CREATION, base + timedelta(minutes=1))
        api = _execution(plan_step.id, ExecutionType.API_CALL, base + timedelta(minutes=2))
        unfinished = _execution(
            plan_step.id, ExecutionType.CODE_GENERATION, base + timedelta(minutes=3)
        )
        for request in (code, files, api, unfinished):
            execution_repo.save_request(request)
        for request in (code, files, api):
            execution_repo.update_request_status(request.id, RequestStatus.COMPLETED)

        deployable = execution_repo.list_deployable_requests(plan_step.id)

        assert [request.id for request in deployable] == [files.id, code.id]


# ==================== Deployment ====================


class TestDeploymentRepository:
    def test_round_trip_with_configuration(self, execution_repo, deployment_repo, plan_step):
        execution = ExecutionRequest.create(plan_step.id, ExecutionType.CODE_GENERATION, "react")
        execution_repo.save_request(execution)
        request = DeploymentRequest.create(
            plan_step.id,
            DeploymentType.NETLIFY_STATIC,
            {"subdomain": "demo", "buildCommand": "npm run build"},
            execution.id,
        )
        deployment_repo.save_request(request)
        deployment_repo.save_results(
            [
                DeploymentResult.from_draft(
                    request.id,
                    DeploymentDraft(success=True, deployment_url="https://demo.netlify.app"),
                )
            ]
        )

        [loaded] = deployment_repo.list_requests_by_plan(plan_step.id)
        [result] = deployment_repo.list_results_by_request(request.id)

        assert loaded.deployment_type == DeploymentType.NETLIFY_STATIC
        assert loaded.configuration == {"subdomain": "demo", "buildCommand": "npm run build"}
        assert loaded.execution_request_id == execution.id
        assert result.deployment_url == "https://demo.netlify.app"


# ==================== Base ====================


class TestAgentRecordRepositoryBase:
    def test_assembler_hooks_are_abstract(self, db_session):
        class IncompleteRepository(_AgentRecordRepository):
            request_model = PlanStepModel
            result_model = ResearchResultModel

        with pytest.raises(TypeError):
            IncompleteRepository(db_session)
