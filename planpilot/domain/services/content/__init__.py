"""内容模板 - 关键词匹配的模板生成器（纯函数，无 I/O）"""

from planpilot.domain.services.content.deployment_templates import (
    DEPLOYMENT_PROVIDERS,
    generate_build_logs,
    perform_deployment,
)
from planpilot.domain.services.content.execution_templates import (
    detect_code_type,
    generate_code,
    perform_execution,
)
from planpilot.domain.services.content.plan_templates import (
    GeneratedPlan,
    PlanStepDraft,
    SubtaskDraft,
    generate_task_plan,
    select_plan_template,
    select_subtask_template,
)
from planpilot.domain.services.content.research_templates import (
    compose_research_results,
    fallback_research_results,
)

__all__ = [
    "DEPLOYMENT_PROVIDERS",
    "GeneratedPlan",
    "PlanStepDraft",
    "SubtaskDraft",
    "compose_research_results",
    "detect_code_type",
    "fallback_research_results",
    "generate_build_logs",
    "generate_code",
    "generate_task_plan",
    "perform_deployment",
    "perform_execution",
    "select_plan_template",
    "select_subtask_template",
]
