"""计划模板 - 把自由文本目标展开为固定的计划步骤与子任务

职责：
1. select_plan_template(): 目标文本 → 有序的 PlanStepDraft 列表
2. select_subtask_template(): 步骤标题 → 有序的 SubtaskDraft 列表
3. generate_task_plan(): 组合两者，得到完整的计划草稿

两个选择函数都是纯函数且总能返回非空列表：
- 计划规则顺序：business → learn → travel → event → generic
- 子任务规则顺序：market research → business plan → foundation → destination → generic
"""

from __future__ import annotations

from dataclasses import dataclass

from planpilot.domain.services.content.keyword_rules import KeywordRule, match_first
from planpilot.domain.value_objects.plan_status import Priority


@dataclass(frozen=True)
class PlanStepDraft:
    title: str
    description: str
    sequence_order: int
    estimated_duration: str
    priority: Priority


@dataclass(frozen=True)
class SubtaskDraft:
    title: str
    description: str
    sequence_order: int


@dataclass(frozen=True)
class GeneratedPlan:
    """plans[i] 对应 sub_tasks[i]"""

    plans: list[PlanStepDraft]
    sub_tasks: list[list[SubtaskDraft]]


def _steps(*rows: tuple[str, str, str, Priority]) -> tuple[PlanStepDraft, ...]:
    return tuple(
        PlanStepDraft(
            title=title,
            description=description,
            sequence_order=index,
            estimated_duration=duration,
            priority=priority,
        )
        for index, (title, description, duration, priority) in enumerate(rows, start=1)
    )


def _subtasks(*rows: tuple[str, str]) -> tuple[SubtaskDraft, ...]:
    return tuple(
        SubtaskDraft(title=title, description=description, sequence_order=index)
        for index, (title, description) in enumerate(rows, start=1)
    )


# ==================== 计划模板 ====================

BUSINESS_PLAN = _steps(
    (
        "Market Research & Validation",
        "Research your target market, validate your business idea, and analyze competitors",
        "2-3 weeks",
        Priority.HIGH,
    ),
    (
        "Business Plan Development",
        "Create a comprehensive business plan including financial projections and strategy",
        "1-2 weeks",
        Priority.HIGH,
    ),
    (
        "Legal Structure & Registration",
        "Choose business structure, register your business, and handle legal requirements",
        "1 week",
        Priority.MEDIUM,
    ),
    (
        "Product/Service Development",
        "Develop your minimum viable product or service offering",
        "4-8 weeks",
        Priority.HIGH,
    ),
    (
        "Marketing & Launch Strategy",
        "Develop marketing materials, build online presence, and plan your launch",
        "2-3 weeks",
        Priority.MEDIUM,
    ),
)

LEARNING_PLAN = _steps(
    (
        "Foundation & Prerequisites",
        "Establish fundamental knowledge and ensure you have necessary prerequisites",
        "1-2 weeks",
        Priority.HIGH,
    ),
    (
        "Structured Learning Path",
        "Follow a systematic curriculum with hands-on practice and projects",
        "8-12 weeks",
        Priority.HIGH,
    ),
    (
        "Practical Application",
        "Build real projects to apply your knowledge and create a portfolio",
        "4-6 weeks",
        Priority.MEDIUM,
    ),
    (
        "Advanced Topics",
        "Dive deeper into specialized areas and advanced concepts",
        "3-4 weeks",
        Priority.MEDIUM,
    ),
    (
        "Community & Networking",
        "Join communities, attend events, and build professional connections",
        "Ongoing",
        Priority.LOW,
    ),
)

TRAVEL_PLAN = _steps(
    (
        "Destination Research & Planning",
        "Research destinations, create itinerary, and plan activities",
        "1-2 weeks",
        Priority.HIGH,
    ),
    (
        "Budget Planning & Booking",
        "Set budget, book flights, accommodations, and major activities",
        "1 week",
        Priority.HIGH,
    ),
    (
        "Documentation & Preparation",
        "Handle passports, visas, travel insurance, and packing preparation",
        "2-3 weeks",
        Priority.MEDIUM,
    ),
    (
        "Final Preparations",
        "Complete packing, arrange transportation, and handle last-minute details",
        "3-5 days",
        Priority.MEDIUM,
    ),
)

EVENT_PLAN = _steps(
    (
        "Event Concept & Planning",
        "Define event goals, theme, target audience, and initial planning",
        "1 week",
        Priority.HIGH,
    ),
    (
        "Venue & Date Selection",
        "Research and book venue, set date, and handle initial logistics",
        "1-2 weeks",
        Priority.HIGH,
    ),
    (
        "Vendor Coordination",
        "Book catering, entertainment, equipment, and other necessary services",
        "2-3 weeks",
        Priority.MEDIUM,
    ),
    (
        "Marketing & Promotion",
        "Create promotional materials, manage registrations, and build awareness",
        "3-4 weeks",
        Priority.MEDIUM,
    ),
    (
        "Final Preparations & Execution",
        "Handle final details, coordinate day-of logistics, and execute the event",
        "1 week",
        Priority.HIGH,
    ),
)

GENERIC_PLAN = _steps(
    (
        "Goal Analysis & Requirements",
        "Break down the goal into specific requirements and success criteria",
        "2-3 days",
        Priority.HIGH,
    ),
    (
        "Resource Planning",
        "Identify and secure necessary resources, tools, and support",
        "3-5 days",
        Priority.HIGH,
    ),
    (
        "Implementation Phase",
        "Execute the main work required to achieve your goal",
        "2-4 weeks",
        Priority.HIGH,
    ),
    (
        "Review & Optimization",
        "Review progress, make adjustments, and optimize your approach",
        "3-5 days",
        Priority.MEDIUM,
    ),
    (
        "Completion & Follow-up",
        "Finalize deliverables and plan for maintenance or next steps",
        "1-2 days",
        Priority.MEDIUM,
    ),
)

PLAN_RULES: tuple[KeywordRule[tuple[PlanStepDraft, ...]], ...] = (
    KeywordRule("business", ("business", "startup", "company"), BUSINESS_PLAN),
    KeywordRule("learning", ("learn", "study", "development"), LEARNING_PLAN),
    KeywordRule("travel", ("travel", "vacation", "trip"), TRAVEL_PLAN),
    KeywordRule("event", ("event", "party", "fundrais"), EVENT_PLAN),
)


# ==================== 子任务模板 ====================

MARKET_RESEARCH_SUBTASKS = _subtasks(
    ("Define target customer persona", "Create detailed profiles of your ideal customers"),
    ("Conduct customer interviews", "Interview 10-15 potential customers about their needs"),
    ("Analyze competitor landscape", "Research direct and indirect competitors"),
    ("Validate market size", "Estimate total addressable market and demand"),
    ("Document findings", "Compile research into actionable insights"),
)

BUSINESS_PLAN_SUBTASKS = _subtasks(
    ("Executive summary", "Write compelling overview of your business"),
    ("Financial projections", "Create 3-year revenue and expense forecasts"),
    ("Marketing strategy", "Define how you'll reach and acquire customers"),
    ("Operations plan", "Outline how your business will operate day-to-day"),
    ("Risk analysis", "Identify potential risks and mitigation strategies"),
)

FOUNDATION_SUBTASKS = _subtasks(
    ("Assess current knowledge", "Take assessment tests to identify knowledge gaps"),
    ("Set up learning environment", "Install necessary tools and software"),
    ("Gather learning resources", "Collect books, courses, and online materials"),
    ("Create study schedule", "Plan daily/weekly study time blocks"),
    ("Join learning community", "Find online forums or local groups"),
)

DESTINATION_SUBTASKS = _subtasks(
    ("Research destinations", "Compare different travel destinations and attractions"),
    ("Check travel requirements", "Verify visa, vaccination, and documentation needs"),
    ("Plan daily itinerary", "Create day-by-day activity schedule"),
    ("Research local customs", "Learn about culture, etiquette, and local practices"),
    ("Create packing checklist", "List all items needed for the trip"),
)

GENERIC_SUBTASKS = _subtasks(
    ("Define specific objectives", "Set clear, measurable goals for this phase"),
    ("Gather required resources", "Collect all necessary tools, information, and materials"),
    ("Create action timeline", "Break down work into daily/weekly milestones"),
    ("Execute planned activities", "Complete the main work items for this phase"),
    ("Review and document progress", "Assess results and document lessons learned"),
)

SUBTASK_RULES: tuple[KeywordRule[tuple[SubtaskDraft, ...]], ...] = (
    KeywordRule("market_research", ("market research", "validation"), MARKET_RESEARCH_SUBTASKS),
    KeywordRule("business_plan", ("business plan",), BUSINESS_PLAN_SUBTASKS),
    KeywordRule("foundation", ("foundation", "prerequisite"), FOUNDATION_SUBTASKS),
    KeywordRule("destination", ("destination", "research"), DESTINATION_SUBTASKS),
)


# ==================== 公共函数 ====================


def select_plan_template(goal_text: str) -> list[PlanStepDraft]:
    """根据目标文本选择计划模板（返回新列表，模板本身不可变）"""
    return list(match_first(goal_text, PLAN_RULES, GENERIC_PLAN))


def select_subtask_template(step_title: str) -> list[SubtaskDraft]:
    """根据步骤标题选择子任务模板"""
    return list(match_first(step_title, SUBTASK_RULES, GENERIC_SUBTASKS))


def generate_task_plan(goal_text: str) -> GeneratedPlan:
    """展开目标：计划步骤 + 每个步骤的子任务"""
    plans = select_plan_template(goal_text)
    return GeneratedPlan(
        plans=plans,
        sub_tasks=[select_subtask_template(plan.title) for plan in plans],
    )
