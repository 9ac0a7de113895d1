"""Execution 实体 - 执行请求与执行结果

业务定义：
- ExecutionRequest: execution_type + instructions
- ExecutionResult: 一条输出（代码、文件、API 响应、命令输出或错误）
- file_creation 会产生多条 FILE 结果
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from planpilot.domain.entities.agent_request import RequestLifecycleMixin
from planpilot.domain.exceptions import DomainError
from planpilot.domain.value_objects.execution_type import ExecutionOutputType, ExecutionType
from planpilot.domain.value_objects.request_status import RequestStatus


@dataclass
class ExecutionRequest(RequestLifecycleMixin):
    id: str
    plan_id: str
    execution_type: ExecutionType
    instructions: str
    status: RequestStatus = RequestStatus.IN_PROGRESS
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls, plan_id: str, execution_type: ExecutionType, instructions: str
    ) -> "ExecutionRequest":
        if not plan_id or not plan_id.strip():
            raise DomainError("plan_id 不能为空")
        if not instructions or not instructions.strip():
            raise DomainError("instructions 不能为空")
        return cls(
            id=str(uuid4()),
            plan_id=plan_id,
            execution_type=ExecutionType(execution_type),
            instructions=instructions,
        )


@dataclass(frozen=True)
class ExecutionDraft:
    """模板生成的执行输出草稿"""

    output_type: ExecutionOutputType
    content: str
    file_path: str | None = None
    success: bool = True
    error_message: str | None = None


@dataclass
class ExecutionResult:
    id: str
    request_id: str
    output_type: ExecutionOutputType
    content: str
    file_path: str | None
    success: bool
    error_message: str | None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_draft(cls, request_id: str, draft: ExecutionDraft) -> "ExecutionResult":
        return cls(
            id=str(uuid4()),
            request_id=request_id,
            output_type=draft.output_type,
            content=draft.content,
            file_path=draft.file_path,
            success=draft.success,
            error_message=draft.error_message,
        )

    @classmethod
    def error(cls, request_id: str, message: str) -> "ExecutionResult":
        """失败路径使用的错误结果"""
        return cls.from_draft(
            request_id,
            ExecutionDraft(
                output_type=ExecutionOutputType.ERROR,
                content=message,
                success=False,
                error_message=message,
            ),
        )
