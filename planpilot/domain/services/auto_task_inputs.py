"""自动任务输入合成 - Workflow Runner 为每个阶段构造 Agent 输入

- build_research_query(): 步骤标题 + 研究深度
- build_execution_instructions(): 步骤标题/描述 + 执行模式
- build_deployment_config(): 以部署目标为键的配置，包含由标题派生的 slug
"""

from __future__ import annotations

import re
from typing import Any

from planpilot.domain.entities.plan_step import PlanStep
from planpilot.domain.value_objects.auto_start_preferences import ExecutionMode, ResearchDepth
from planpilot.domain.value_objects.deployment_type import DeploymentType

SLUG_MAX_LENGTH = 30

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]")


def plan_slug(title: str) -> str:
    """小写 → 每个非 [a-z0-9] 字符替换为 "-" → 截断到 30 个字符"""
    return _NON_SLUG_CHARS.sub("-", title.lower())[:SLUG_MAX_LENGTH]


def build_research_query(step: PlanStep, depth: ResearchDepth | str) -> str:
    base_query = f"{step.title} best practices and implementation guide"
    depth = ResearchDepth(depth)

    if depth == ResearchDepth.BASIC:
        return f"Quick overview: {base_query}"
    if depth == ResearchDepth.COMPREHENSIVE:
        return (
            "Comprehensive analysis including market research, case studies, and detailed "
            f"implementation for: {base_query}"
        )
    return (
        f"Detailed research on {base_query} including tools, methods, and expert recommendations"
    )


def build_execution_instructions(step: PlanStep, mode: ExecutionMode | str) -> str:
    base_instructions = f"Create implementation for: {step.title}. {step.description or ''}"
    mode = ExecutionMode(mode)

    if mode == ExecutionMode.CONSERVATIVE:
        return f"{base_instructions}. Use simple, proven approaches with minimal dependencies."
    if mode == ExecutionMode.AGGRESSIVE:
        return f"{base_instructions}. Use cutting-edge technologies and advanced features."
    return (
        f"{base_instructions}. Use modern best practices with good balance of features "
        "and stability."
    )


def build_deployment_config(step: PlanStep, provider: DeploymentType | str) -> dict[str, Any]:
    slug = plan_slug(step.title)
    provider = DeploymentType(provider)

    if provider == DeploymentType.NETLIFY_STATIC:
        return {"subdomain": slug, "buildCommand": "npm run build"}
    if provider == DeploymentType.VERCEL_STATIC:
        return {"projectName": slug, "framework": "react"}
    if provider == DeploymentType.GITHUB_PAGES:
        return {"username": "auto-user", "repository": slug}
    return {}
