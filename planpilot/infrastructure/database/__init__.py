"""数据库基础设施 - SQLAlchemy 引擎、ORM 模型与仓储实现"""
