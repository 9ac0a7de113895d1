"""TransactionManager Port - 事务控制抽象

UseCase 与 Recorder 依赖抽象事务控制，基础设施层提供 SQLAlchemy 实现。
"""

from __future__ import annotations

from typing import Protocol


class TransactionManager(Protocol):
    def commit(self) -> None: ...

    def rollback(self) -> None: ...
