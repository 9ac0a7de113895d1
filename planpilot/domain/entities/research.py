"""Research 实体 - 研究请求与研究结果

业务定义：
- ResearchRequest: 针对某个 Plan Step 的一次研究查询
- ResearchResult: 一条研究摘要，relevance_score 取值 1-10
- 一个请求可以产生多条结果
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from planpilot.domain.entities.agent_request import RequestLifecycleMixin
from planpilot.domain.exceptions import DomainError
from planpilot.domain.value_objects.request_status import RequestStatus

MIN_RELEVANCE = 1
MAX_RELEVANCE = 10
DEFAULT_RELEVANCE = 5


@dataclass
class ResearchRequest(RequestLifecycleMixin):
    id: str
    plan_id: str
    query: str
    status: RequestStatus = RequestStatus.IN_PROGRESS
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, plan_id: str, query: str) -> "ResearchRequest":
        """创建研究请求（直接处于 IN_PROGRESS）"""
        if not plan_id or not plan_id.strip():
            raise DomainError("plan_id 不能为空")
        return cls(id=str(uuid4()), plan_id=plan_id, query=query)


@dataclass(frozen=True)
class ResearchDraft:
    """模板生成的研究结果草稿（尚未关联请求）"""

    title: str
    content: str
    summary: str | None = None
    source_url: str | None = None
    relevance_score: int = DEFAULT_RELEVANCE


def clamp_relevance(score: int | None) -> int:
    """把相关度限制在 1-10 之间，缺省为 5"""
    if score is None:
        score = DEFAULT_RELEVANCE
    return min(MAX_RELEVANCE, max(MIN_RELEVANCE, int(score)))


@dataclass
class ResearchResult:
    id: str
    request_id: str
    title: str
    content: str
    summary: str | None
    source_url: str | None
    relevance_score: int
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_draft(cls, request_id: str, draft: ResearchDraft) -> "ResearchResult":
        return cls(
            id=str(uuid4()),
            request_id=request_id,
            title=draft.title,
            content=draft.content,
            summary=draft.summary,
            source_url=draft.source_url,
            relevance_score=clamp_relevance(draft.relevance_score),
        )
