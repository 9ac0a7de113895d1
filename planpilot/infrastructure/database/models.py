"""ORM 模型 - 数据库表映射

九张表：
- user_goals → task_plans → sub_tasks
- task_plans → research_requests → research_results
- task_plans → execution_requests → execution_results
- task_plans → deployment_requests → deployment_results

设计原则：
- 使用 SQLAlchemy 2.0 风格（Mapped、mapped_column）
- 主键使用 UUID 字符串（与领域实体一致）
- 外键使用级联删除（CASCADE）
- 时间戳以 naive UTC 存储，仓储读取时补上 tzinfo
"""

from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from planpilot.infrastructure.database.base import Base


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class GoalModel(Base):
    """Goal ORM 模型

    表名：user_goals

    关系：
    - plans: 一对多（删除 Goal 时级联删除所有 PlanStep）
    """

    __tablename__ = "user_goals"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Goal ID（UUID）")
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, comment="所属用户")
    title: Mapped[str] = mapped_column(Text, nullable=False, comment="目标文本")
    description: Mapped[str | None] = mapped_column(Text, nullable=True, comment="描述")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="planning", comment="planning/in_progress/completed"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, comment="创建时间"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, comment="更新时间"
    )

    plans: Mapped[list["PlanStepModel"]] = relationship(
        "PlanStepModel",
        back_populates="goal",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('planning', 'in_progress', 'completed')", name="ck_user_goals_status"
        ),
        Index("idx_user_goals_user_id", "user_id"),
        Index("idx_user_goals_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<GoalModel(id={self.id}, user_id={self.user_id}, status={self.status})>"


class PlanStepModel(Base):
    """PlanStep ORM 模型

    表名：task_plans

    外键约束：
    - goal_id → user_goals.id（级联删除）
    """

    __tablename__ = "task_plans"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Plan Step ID（UUID）")
    goal_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("user_goals.id", ondelete="CASCADE"),
        nullable=False,
        comment="关联的 Goal ID",
    )
    title: Mapped[str] = mapped_column(Text, nullable=False, comment="步骤标题")
    description: Mapped[str | None] = mapped_column(Text, nullable=True, comment="步骤描述")
    sequence_order: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="顺序号（从 1 开始）"
    )
    estimated_duration: Mapped[str | None] = mapped_column(
        String(100), nullable=True, comment="预估时长"
    )
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default="medium", comment="low/medium/high"
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", comment="pending/in_progress/completed"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, comment="创建时间"
    )

    goal: Mapped["GoalModel"] = relationship("GoalModel", back_populates="plans")
    sub_tasks: Mapped[list["SubTaskModel"]] = relationship(
        "SubTaskModel",
        back_populates="plan",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    research_requests: Mapped[list["ResearchRequestModel"]] = relationship(
        "ResearchRequestModel", cascade="all, delete-orphan", passive_deletes=True
    )
    execution_requests: Mapped[list["ExecutionRequestModel"]] = relationship(
        "ExecutionRequestModel", cascade="all, delete-orphan", passive_deletes=True
    )
    deployment_requests: Mapped[list["DeploymentRequestModel"]] = relationship(
        "DeploymentRequestModel", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("priority IN ('low', 'medium', 'high')", name="ck_task_plans_priority"),
        CheckConstraint(
            "status IN ('pending', 'in_progress', 'completed')", name="ck_task_plans_status"
        ),
        Index("idx_task_plans_goal_id", "goal_id"),
    )

    def __repr__(self) -> str:
        return f"<PlanStepModel(id={self.id}, goal_id={self.goal_id}, order={self.sequence_order})>"


class SubTaskModel(Base):
    """SubTask ORM 模型

    表名：sub_tasks
    """

    __tablename__ = "sub_tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Sub-task ID（UUID）")
    plan_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("task_plans.id", ondelete="CASCADE"),
        nullable=False,
        comment="关联的 Plan Step ID",
    )
    title: Mapped[str] = mapped_column(Text, nullable=False, comment="子任务标题")
    description: Mapped[str | None] = mapped_column(Text, nullable=True, comment="子任务描述")
    sequence_order: Mapped[int] = mapped_column(Integer, nullable=False, comment="顺序号")
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, comment="是否已完成"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, comment="创建时间"
    )

    plan: Mapped["PlanStepModel"] = relationship("PlanStepModel", back_populates="sub_tasks")

    __table_args__ = (Index("idx_sub_tasks_plan_id", "plan_id"),)


_REQUEST_STATUS_CHECK = "status IN ('pending', 'in_progress', 'completed', 'failed')"


class ResearchRequestModel(Base):
    """研究请求（research_requests）"""

    __tablename__ = "research_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Request ID（UUID）")
    plan_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("task_plans.id", ondelete="CASCADE"),
        nullable=False,
        comment="关联的 Plan Step ID",
    )
    query: Mapped[str] = mapped_column(Text, nullable=False, comment="研究查询")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", comment="请求状态"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, comment="创建时间"
    )

    results: Mapped[list["ResearchResultModel"]] = relationship(
        "ResearchResultModel", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint(_REQUEST_STATUS_CHECK, name="ck_research_requests_status"),
        Index("idx_research_requests_plan_id", "plan_id"),
    )


class ResearchResultModel(Base):
    """研究结果（research_results）"""

    __tablename__ = "research_results"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Result ID（UUID）")
    request_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("research_requests.id", ondelete="CASCADE"),
        nullable=False,
        comment="关联的研究请求 ID",
    )
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True, comment="来源地址")
    title: Mapped[str] = mapped_column(Text, nullable=False, comment="标题")
    content: Mapped[str] = mapped_column(Text, nullable=False, comment="内容")
    summary: Mapped[str | None] = mapped_column(Text, nullable=True, comment="摘要")
    relevance_score: Mapped[int] = mapped_column(
        Integer, nullable=False, default=5, comment="相关度（1-10）"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, comment="创建时间"
    )

    __table_args__ = (
        CheckConstraint(
            "relevance_score >= 1 AND relevance_score <= 10",
            name="ck_research_results_relevance_score",
        ),
        Index("idx_research_results_request_id", "request_id"),
    )


class ExecutionRequestModel(Base):
    """执行请求（execution_requests）"""

    __tablename__ = "execution_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Request ID（UUID）")
    plan_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("task_plans.id", ondelete="CASCADE"),
        nullable=False,
        comment="关联的 Plan Step ID",
    )
    execution_type: Mapped[str] = mapped_column(String(50), nullable=False, comment="执行类型")
    instructions: Mapped[str] = mapped_column(Text, nullable=False, comment="执行指令")
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", comment="请求状态"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, comment="创建时间"
    )

    results: Mapped[list["ExecutionResultModel"]] = relationship(
        "ExecutionResultModel", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint(
            "execution_type IN ('code_generation', 'script_execution', 'api_call', "
            "'file_creation', 'environment_setup')",
            name="ck_execution_requests_execution_type",
        ),
        CheckConstraint(_REQUEST_STATUS_CHECK, name="ck_execution_requests_status"),
        Index("idx_execution_requests_plan_id", "plan_id"),
    )


class ExecutionResultModel(Base):
    """执行结果（execution_results）"""

    __tablename__ = "execution_results"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Result ID（UUID）")
    request_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("execution_requests.id", ondelete="CASCADE"),
        nullable=False,
        comment="关联的执行请求 ID",
    )
    output_type: Mapped[str] = mapped_column(String(50), nullable=False, comment="输出类型")
    content: Mapped[str] = mapped_column(Text, nullable=False, comment="输出内容")
    file_path: Mapped[str | None] = mapped_column(Text, nullable=True, comment="文件路径")
    success: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, comment="是否成功"
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True, comment="错误信息")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, comment="创建时间"
    )

    __table_args__ = (
        CheckConstraint(
            "output_type IN ('code', 'file', 'api_response', 'command_output', 'error')",
            name="ck_execution_results_output_type",
        ),
        Index("idx_execution_results_request_id", "request_id"),
    )


class DeploymentRequestModel(Base):
    """部署请求（deployment_requests）"""

    __tablename__ = "deployment_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Request ID（UUID）")
    plan_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("task_plans.id", ondelete="CASCADE"),
        nullable=False,
        comment="关联的 Plan Step ID",
    )
    execution_request_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("execution_requests.id", ondelete="CASCADE"),
        nullable=True,
        comment="被部署的执行请求 ID",
    )
    deployment_type: Mapped[str] = mapped_column(String(50), nullable=False, comment="部署类型")
    configuration: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict, comment="部署配置"
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", comment="请求状态"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, comment="创建时间"
    )

    results: Mapped[list["DeploymentResultModel"]] = relationship(
        "DeploymentResultModel", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint(
            "deployment_type IN ('netlify_static', 'vercel_static', 'github_pages', "
            "'custom_hosting')",
            name="ck_deployment_requests_deployment_type",
        ),
        CheckConstraint(_REQUEST_STATUS_CHECK, name="ck_deployment_requests_status"),
        Index("idx_deployment_requests_plan_id", "plan_id"),
    )


class DeploymentResultModel(Base):
    """部署结果（deployment_results）"""

    __tablename__ = "deployment_results"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, comment="Result ID（UUID）")
    request_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deployment_requests.id", ondelete="CASCADE"),
        nullable=False,
        comment="关联的部署请求 ID",
    )
    deployment_url: Mapped[str | None] = mapped_column(Text, nullable=True, comment="站点地址")
    claim_url: Mapped[str | None] = mapped_column(Text, nullable=True, comment="认领地址")
    deploy_id: Mapped[str | None] = mapped_column(String(100), nullable=True, comment="部署 ID")
    success: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, comment="是否成功"
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True, comment="错误信息")
    build_logs: Mapped[str | None] = mapped_column(Text, nullable=True, comment="构建日志")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=_utcnow, comment="创建时间"
    )

    __table_args__ = (Index("idx_deployment_results_request_id", "request_id"),)
