"""研究内容模板 - 模拟的研究来源与关键词匹配的兜底结果

职责：
1. compose_research_results(): 主路径，按站点生成社区/问答/文章摘要，再追加行业动态
   - basic 深度只覆盖前 2 个站点，其他深度覆盖 4 个
   - 结果按相关度降序，截断为 3 / 6 / 10 条
   - 查询为空时抛出 ContentGenerationError
2. fallback_research_results(): 主路径失败时使用，按关键词返回 3 条固定结果

不访问网络，所有内容都是字符串模板。
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from urllib.parse import quote

from planpilot.domain.entities.research import ResearchDraft
from planpilot.domain.exceptions import ContentGenerationError
from planpilot.domain.services.content.keyword_rules import KeywordRule, match_first
from planpilot.domain.value_objects.auto_start_preferences import ResearchDepth

MAX_RESULTS_BY_DEPTH: dict[ResearchDepth, int] = {
    ResearchDepth.BASIC: 3,
    ResearchDepth.DETAILED: 6,
    ResearchDepth.COMPREHENSIVE: 10,
}


def _encode(query: str) -> str:
    return quote(query, safe="~()*!.'")


# ==================== 主路径：站点摘要 ====================


def _reddit(q: str) -> ResearchDraft:
    return ResearchDraft(
        title=f"Reddit Discussion: {q}",
        content=(
            f"Community discussions and user experiences related to {q}. Users share practical "
            "insights, common challenges, and real-world solutions. Popular threads include "
            "troubleshooting guides, recommendation threads, and success stories."
        ),
        summary=f"Reddit community insights and discussions about {q}",
        source_url=f"https://www.reddit.com/search/?q={_encode(q)}",
        relevance_score=7,
    )


def _stackoverflow(q: str) -> ResearchDraft:
    return ResearchDraft(
        title=f"Stack Overflow: {q} Solutions",
        content=(
            f"Technical questions and expert answers related to {q}. Includes code examples, "
            "best practices, and common pitfalls to avoid. High-quality answers from experienced "
            "developers with upvoted solutions."
        ),
        summary=f"Technical solutions and code examples for {q}",
        source_url=f"https://stackoverflow.com/search?q={_encode(q)}",
        relevance_score=9,
    )


def _medium(q: str) -> ResearchDraft:
    return ResearchDraft(
        title=f"Medium Articles: {q} Insights",
        content=(
            f"In-depth articles and tutorials about {q} written by industry experts and "
            "practitioners. Covers theoretical concepts, practical implementations, and case "
            "studies with real-world examples."
        ),
        summary=f"Expert articles and tutorials about {q}",
        source_url=f"https://medium.com/search?q={_encode(q)}",
        relevance_score=8,
    )


def _devto(q: str) -> ResearchDraft:
    return ResearchDraft(
        title=f"Dev.to Community: {q}",
        content=(
            f"Developer community posts about {q} including tutorials, project showcases, and "
            "technical discussions. Features beginner-friendly explanations and advanced "
            "techniques."
        ),
        summary=f"Developer community content about {q}",
        source_url=f"https://dev.to/search?q={_encode(q)}",
        relevance_score=7,
    )


SITE_SOURCES: tuple[tuple[str, Callable[[str], ResearchDraft]], ...] = (
    ("reddit.com", _reddit),
    ("stackoverflow.com", _stackoverflow),
    ("medium.com", _medium),
    ("dev.to", _devto),
)


def _news(q: str, now: datetime) -> list[ResearchDraft]:
    return [
        ResearchDraft(
            title=f"{now.year} Industry Trends: {q}",
            content=(
                f"Latest industry developments and trends related to {q}. Market analysis shows "
                "continued growth and innovation in this sector with new technologies and "
                "methodologies emerging."
            ),
            summary=f"Current industry trends and developments in {q}",
            source_url=None,
            relevance_score=6,
        )
    ]


def compose_research_results(
    query: str,
    depth: ResearchDepth = ResearchDepth.DETAILED,
    *,
    now: datetime | None = None,
) -> list[ResearchDraft]:
    """模拟的研究主路径

    抛出：
        ContentGenerationError: 查询为空时
    """
    q = (query or "").strip()
    if not q:
        raise ContentGenerationError("Query is required")

    depth = ResearchDepth(depth)
    site_count = 2 if depth == ResearchDepth.BASIC else 4

    drafts = [build(q) for _, build in SITE_SOURCES[:site_count]]
    drafts.extend(_news(q, now or datetime.now(UTC)))

    drafts.sort(key=lambda draft: draft.relevance_score, reverse=True)
    return drafts[: MAX_RESULTS_BY_DEPTH[depth]]


# ==================== 兜底路径：关键词模板 ====================


def _market_fallback(q: str) -> list[ResearchDraft]:
    return [
        ResearchDraft(
            source_url="https://marketresearch.com/industry-analysis",
            title=f"Market Analysis: {q}",
            content=(
                f"Comprehensive market research for {q} indicates strong growth potential with "
                "emerging opportunities. Industry experts suggest focusing on digital "
                "transformation and customer experience improvements. Key market drivers include "
                "technological advancement and changing consumer preferences."
            ),
            summary="Market shows growth potential with focus on digital transformation",
            relevance_score=8,
        ),
        ResearchDraft(
            source_url="https://competitoranalysis.com/reports",
            title=f"Competitive Analysis: {q}",
            content=(
                f"Competitive landscape analysis reveals opportunities for differentiation in {q}. "
                "Top competitors show strengths in established market presence but weaknesses in "
                "innovation and customer service. Market gaps exist in mobile experience and "
                "personalization."
            ),
            summary="Competitive analysis shows opportunities for differentiation",
            relevance_score=7,
        ),
        ResearchDraft(
            source_url="https://industryreport.com/trends",
            title=f"Industry Trends: {q}",
            content=(
                f"Latest trends in {q} show increased adoption of AI and automation, sustainable "
                "practices, and customer-centric approaches. Industry growth rate projected at "
                "12-15% annually with significant investment in technology infrastructure."
            ),
            summary="Industry trends favor AI adoption and sustainable practices",
            relevance_score=8,
        ),
    ]


def _learning_fallback(q: str) -> list[ResearchDraft]:
    return [
        ResearchDraft(
            source_url="https://education-platform.com/courses",
            title=f"Learning Path: {q}",
            content=(
                f"Structured learning approach for {q} includes foundational concepts, hands-on "
                "practice, and real-world projects. Recommended timeline: 3-6 months for "
                "proficiency. Key resources include online courses, documentation, and community "
                "forums."
            ),
            summary="Structured 3-6 month learning path with hands-on practice",
            relevance_score=9,
        ),
        ResearchDraft(
            source_url="https://skillassessment.com/reports",
            title=f"Skills Assessment: {q}",
            content=(
                f"Current market demand for {q} skills shows 25% year-over-year growth. Top "
                "employers seek practical experience and portfolio projects. Average learning "
                "time: 200-400 hours for proficiency. High demand in tech, finance, and "
                "healthcare sectors."
            ),
            summary="25% growth in demand, 200-400 hours typical learning time",
            relevance_score=8,
        ),
        ResearchDraft(
            source_url="https://learningresources.com/guides",
            title=f"Resource Guide: {q}",
            content=(
                f"Comprehensive resource compilation for {q} including free and paid options. "
                "Best practices include combining theoretical study with practical projects, "
                "joining communities, and seeking mentorship. Success rate higher with structured "
                "approach."
            ),
            summary="Comprehensive resources with emphasis on practical projects",
            relevance_score=7,
        ),
    ]


def _travel_fallback(q: str) -> list[ResearchDraft]:
    return [
        ResearchDraft(
            source_url="https://travel-guide.com/destinations",
            title=f"Travel Guide: {q}",
            content=(
                f"Complete travel information for {q} including best times to visit, must-see "
                "attractions, local customs, and practical tips. Budget estimates, transportation "
                "options, and accommodation recommendations included. Safety guidelines and "
                "cultural considerations provided."
            ),
            summary="Complete travel guide with budget estimates and cultural tips",
            relevance_score=9,
        ),
        ResearchDraft(
            source_url="https://travel-costs.com/calculator",
            title=f"Travel Costs: {q}",
            content=(
                f"Detailed cost breakdown for {q} including accommodation ($50-200/night), meals "
                "($30-80/day), transportation, and activities. Seasonal price variations and "
                "money-saving tips. Budget options and luxury alternatives compared."
            ),
            summary="Detailed cost breakdown with budget and luxury options",
            relevance_score=8,
        ),
        ResearchDraft(
            source_url="https://travel-requirements.com/info",
            title=f"Travel Requirements: {q}",
            content=(
                "Current travel requirements including visa policies, vaccination requirements, "
                "and documentation needed. Entry procedures, customs regulations, and travel "
                "insurance recommendations. Updated health and safety protocols."
            ),
            summary="Current travel requirements and health protocols",
            relevance_score=8,
        ),
    ]


def _technology_fallback(q: str) -> list[ResearchDraft]:
    return [
        ResearchDraft(
            source_url="https://tech-analysis.com/reviews",
            title=f"Technology Review: {q}",
            content=(
                f"In-depth technical analysis of {q} covering features, performance, scalability, "
                "and implementation considerations. Comparison with alternatives, pros/cons "
                "analysis, and real-world case studies. Expert recommendations and best practices."
            ),
            summary="Technical analysis with performance metrics and case studies",
            relevance_score=9,
        ),
        ResearchDraft(
            source_url="https://implementation-guide.com/tutorials",
            title=f"Implementation Guide: {q}",
            content=(
                f"Step-by-step implementation guide for {q} including setup instructions, "
                "configuration options, and common troubleshooting solutions. Code examples, "
                "architecture patterns, and optimization techniques provided."
            ),
            summary="Step-by-step implementation with code examples",
            relevance_score=8,
        ),
        ResearchDraft(
            source_url="https://tech-trends.com/analysis",
            title=f"Technology Trends: {q}",
            content=(
                f"Current trends and future outlook for {q} in the technology landscape. Adoption "
                "rates, market leaders, emerging alternatives, and investment trends. Impact on "
                "business operations and competitive advantages."
            ),
            summary="Technology trends and market adoption analysis",
            relevance_score=7,
        ),
    ]


def _generic_fallback(q: str) -> list[ResearchDraft]:
    return [
        ResearchDraft(
            source_url="https://research-database.com/analysis",
            title=f"Comprehensive Analysis: {q}",
            content=(
                f"Detailed research findings for {q} based on current data and expert analysis. "
                "Key insights include market opportunities, implementation strategies, and "
                "success factors. Multiple perspectives and case studies provide comprehensive "
                "understanding."
            ),
            summary=f"Comprehensive research findings and expert analysis for {q}",
            relevance_score=7,
        ),
        ResearchDraft(
            source_url="https://expert-insights.com/reports",
            title=f"Expert Insights: {q}",
            content=(
                f"Professional analysis and recommendations for {q} from industry experts. Covers "
                "best practices, common challenges, and proven solutions. Strategic "
                "considerations and tactical implementation approaches discussed."
            ),
            summary="Expert recommendations and best practices",
            relevance_score=8,
        ),
        ResearchDraft(
            source_url="https://case-studies.com/examples",
            title=f"Case Studies: {q}",
            content=(
                f"Real-world examples and case studies related to {q}. Success stories, lessons "
                "learned, and practical applications demonstrated. Measurable outcomes and "
                "implementation timelines provided for reference."
            ),
            summary="Real-world case studies with measurable outcomes",
            relevance_score=6,
        ),
    ]


FALLBACK_RULES: tuple[KeywordRule[Callable[[str], list[ResearchDraft]]], ...] = (
    KeywordRule("market", ("market", "business", "competitor"), _market_fallback),
    KeywordRule("learning", ("learn", "course", "development", "skill"), _learning_fallback),
    KeywordRule("travel", ("travel", "destination", "vacation"), _travel_fallback),
    KeywordRule("technology", ("technology", "software", "app", "web"), _technology_fallback),
)


def fallback_research_results(query: str) -> list[ResearchDraft]:
    """兜底研究结果（总能返回 3 条）"""
    build = match_first(query, FALLBACK_RULES, _generic_fallback)
    return build(query)
