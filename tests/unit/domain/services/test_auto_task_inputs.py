"""测试：自动任务输入合成"""

import pytest

from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.services.auto_task_inputs import (
    build_deployment_config,
    build_execution_instructions,
    build_research_query,
    plan_slug,
)
from planpilot.domain.value_objects.auto_start_preferences import ExecutionMode, ResearchDepth
from planpilot.domain.value_objects.deployment_type import DeploymentType


@pytest.fixture
def step() -> PlanStep:
    return PlanStep.create(
        goal_id="goal-1",
        title="Market Research & Validation",
        description="Research your target market",
        sequence_order=1,
    )


class TestPlanSlug:
    def test_non_alphanumeric_characters_become_dashes(self):
        assert plan_slug("Market Research & Validation!!") == "market-research---validation--"

    def test_truncated_to_thirty_characters(self):
        slug = plan_slug("A very long plan step title that keeps going")

        assert len(slug) == 30
        assert slug == "a-very-long-plan-step-title-th"


class TestBuildResearchQuery:
    def test_basic(self, step):
        assert build_research_query(step, ResearchDepth.BASIC) == (
            "Quick overview: Market Research & Validation best practices and implementation guide"
        )

    def test_detailed(self, step):
        query = build_research_query(step, "detailed")

        assert query.startswith("Detailed research on Market Research & Validation")
        assert query.endswith("including tools, methods, and expert recommendations")

    def test_comprehensive(self, step):
        query = build_research_query(step, ResearchDepth.COMPREHENSIVE)

        assert query.startswith("Comprehensive analysis including market research, case studies")
        assert query.endswith(
            "for: Market Research & Validation best practices and implementation guide"
        )


class TestBuildExecutionInstructions:
    def test_conservative(self, step):
        instructions = build_execution_instructions(step, ExecutionMode.CONSERVATIVE)

        assert instructions == (
            "Create implementation for: Market Research & Validation. Research your target "
            "market. Use simple, proven approaches with minimal dependencies."
        )

    def test_aggressive(self, step):
        instructions = build_execution_instructions(step, ExecutionMode.AGGRESSIVE)

        assert instructions.endswith("Use cutting-edge technologies and advanced features.")

    def test_standard(self, step):
        instructions = build_execution_instructions(step, "standard")

        assert instructions.endswith(
            "Use modern best practices with good balance of features and stability."
        )

    def test_missing_description(self, step):
        step.description = None

        instructions = build_execution_instructions(step, ExecutionMode.AGGRESSIVE)

        assert instructions.startswith("Create implementation for: Market Research & Validation. .")


class TestBuildDeploymentConfig:
    def test_netlify(self, step):
        assert build_deployment_config(step, DeploymentType.NETLIFY_STATIC) == {
            "subdomain": "market-research---validation",
            "buildCommand": "npm run build",
        }

    def test_vercel(self, step):
        assert build_deployment_config(step, DeploymentType.VERCEL_STATIC) == {
            "projectName": "market-research---validation",
            "framework": "react",
        }

    def test_github_pages(self, step):
        assert build_deployment_config(step, "github_pages") == {
            "username": "auto-user",
            "repository": "market-research---validation",
        }

    def test_custom_hosting_is_empty(self, step):
        assert build_deployment_config(step, DeploymentType.CUSTOM_HOSTING) == {}
