"""AgentRecorder - 模拟 Agent 调用的请求/结果落库模板

一次调用的流程：
1. 创建请求记录（直接 IN_PROGRESS）并提交；失败则抛出 AgentInvocationError
2. 在模拟延迟内生成内容
3. 成功：写入结果，请求 → COMPLETED，返回 OK
4. 生成或写入失败：回滚，请求 → FAILED，交给子类的 _recover() 兜底
5. 状态更新失败只记录日志，内存中的请求仍是终态
6. 模拟延迟期间被取消：请求 → FAILED，再继续抛出 CancelledError

每次写入独立提交，没有跨写入的原子性，也没有重试。
"""

from __future__ import annotations

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from planpilot.application.ports.transaction_manager import TransactionManager
from planpilot.config import settings
from planpilot.domain.exceptions import (
    AgentInvocationError,
    ContentGenerationError,
    ResultPersistenceError,
)
from planpilot.domain.value_objects.agent_domain import AgentDomain
from planpilot.domain.value_objects.request_status import RequestStatus

InputT = TypeVar("InputT")
RequestT = TypeVar("RequestT")
ResultT = TypeVar("ResultT")

SleepFn = Callable[[float], Awaitable[Any]]


class AgentOutcomeKind(str, Enum):
    OK = "ok"
    DEGRADED = "degraded"
    FAILED = "failed"


@dataclass(frozen=True)
class AgentOutcome(Generic[RequestT, ResultT]):
    """一次 Agent 调用的结果

    - OK: 内容生成并写入成功
    - DEGRADED: 主路径失败，返回了兜底内容（研究）
    - FAILED: 主路径失败，results 为错误结果或未能写入的结果
    """

    kind: AgentOutcomeKind
    request: RequestT
    results: list[ResultT] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind == AgentOutcomeKind.OK

    @property
    def failed(self) -> bool:
        return self.kind == AgentOutcomeKind.FAILED


class AgentRecorder(ABC, Generic[InputT, RequestT, ResultT]):
    """三类 Agent Recorder 的公共模板

    子类提供：
    - domain: Agent 领域
    - _build_request(): 构造请求实体（实体校验失败抛 DomainError）
    - _latency_ms(): 模拟延迟（毫秒）
    - _generate(): 生成结果实体
    - _recover(): 失败兜底
    """

    domain: AgentDomain

    def __init__(
        self,
        repository: Any,
        transaction_manager: TransactionManager,
        *,
        sleep: SleepFn = asyncio.sleep,
        latency_scale: float | None = None,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repository = repository
        self._transaction_manager = transaction_manager
        self._sleep = sleep
        self._latency_scale = (
            settings.agent_latency_scale if latency_scale is None else latency_scale
        )
        self._rng = rng
        self._logger = logger or logging.getLogger(__name__)

    async def run(self, plan_id: str, payload: InputT) -> AgentOutcome[RequestT, ResultT]:
        """执行一次模拟 Agent 调用

        抛出：
            DomainError: 输入不合法（如 instructions 为空）
            AgentInvocationError: 请求记录写入失败
        """
        request = self._build_request(plan_id, payload)
        self._persist_request(plan_id, request)

        try:
            await self._sleep(self._latency_ms(payload) / 1000 * self._latency_scale)
        except asyncio.CancelledError:
            self._logger.warning(
                "%s request %s cancelled before completion", self.domain.value, request.id
            )
            self._finish(request, RequestStatus.FAILED)
            raise

        try:
            results = self._generate(request, payload)
        except ContentGenerationError as exc:
            self._logger.warning(
                "%s content generation failed for request %s: %s",
                self.domain.value,
                request.id,
                exc,
            )
            self._finish(request, RequestStatus.FAILED)
            return self._recover(request, payload, exc, None)

        try:
            self._repository.save_results(results)
            self._transaction_manager.commit()
        except ResultPersistenceError as exc:
            self._transaction_manager.rollback()
            self._logger.warning(
                "%s results could not be saved for request %s: %s",
                self.domain.value,
                request.id,
                exc,
            )
            self._finish(request, RequestStatus.FAILED)
            return self._recover(request, payload, exc, results)

        status = self._final_status(results)
        self._finish(request, status)
        if status == RequestStatus.FAILED:
            return AgentOutcome(
                kind=AgentOutcomeKind.FAILED,
                request=request,
                results=results,
                error=self._failure_message(results),
            )
        return AgentOutcome(kind=AgentOutcomeKind.OK, request=request, results=results)

    def _persist_request(self, plan_id: str, request: RequestT) -> None:
        try:
            self._repository.save_request(request)
            self._transaction_manager.commit()
        except ResultPersistenceError as exc:
            self._transaction_manager.rollback()
            raise AgentInvocationError(self.domain.value, plan_id, exc.reason) from exc

    def _finish(self, request: Any, status: RequestStatus) -> None:
        if status == RequestStatus.COMPLETED:
            request.complete()
        else:
            request.fail()

        try:
            self._repository.update_request_status(request.id, status)
            self._transaction_manager.commit()
        except ResultPersistenceError as exc:
            self._transaction_manager.rollback()
            self._logger.warning(
                "%s request %s status update to %s failed: %s",
                self.domain.value,
                request.id,
                status.value,
                exc,
            )

    def _persist_best_effort(self, results: list[ResultT]) -> bool:
        try:
            self._repository.save_results(results)
            self._transaction_manager.commit()
        except ResultPersistenceError as exc:
            self._transaction_manager.rollback()
            self._logger.warning("%s fallback results not saved: %s", self.domain.value, exc)
            return False
        return True

    def _final_status(self, results: list[ResultT]) -> RequestStatus:
        return RequestStatus.COMPLETED

    def _failure_message(self, results: list[ResultT]) -> str | None:
        return None

    @abstractmethod
    def _build_request(self, plan_id: str, payload: InputT) -> RequestT: ...

    @abstractmethod
    def _latency_ms(self, payload: InputT) -> int: ...

    @abstractmethod
    def _generate(self, request: RequestT, payload: InputT) -> list[ResultT]: ...

    @abstractmethod
    def _recover(
        self,
        request: RequestT,
        payload: InputT,
        error: Exception,
        generated: list[ResultT] | None,
    ) -> AgentOutcome[RequestT, ResultT]:
        """失败兜底

        generated 为 None 表示内容生成失败；否则表示结果已生成但写入失败。
        """
        ...
