"""ORM 模型基类

所有 ORM 模型都继承自 Base；Base.metadata 包含所有表的元数据
（ensure_sqlite_schema() 与测试中的 create_all 都依赖它）。
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """ORM 模型基类"""

    pass
