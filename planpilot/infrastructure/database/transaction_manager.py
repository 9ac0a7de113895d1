"""SQLAlchemyTransactionManager - SQLAlchemy 事务控制适配器

提交失败时回滚并转换为 ResultPersistenceError。
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from planpilot.application.ports.transaction_manager import TransactionManager
from planpilot.domain.exceptions import ResultPersistenceError


class SQLAlchemyTransactionManager(TransactionManager):
    def __init__(self, session: Session) -> None:
        self._session = session

    def commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise ResultPersistenceError("transaction", str(exc)) from exc

    def rollback(self) -> None:
        self._session.rollback()


__all__ = ["SQLAlchemyTransactionManager"]
