"""SQLAlchemy Repository 实现"""

from planpilot.infrastructure.database.repositories.agent_record_repository import (
    SQLAlchemyDeploymentRepository,
    SQLAlchemyExecutionRepository,
    SQLAlchemyResearchRepository,
)
from planpilot.infrastructure.database.repositories.goal_repository import (
    SQLAlchemyGoalRepository,
    SQLAlchemyPlanStepRepository,
    SQLAlchemySubTaskRepository,
)

__all__ = [
    "SQLAlchemyDeploymentRepository",
    "SQLAlchemyExecutionRepository",
    "SQLAlchemyGoalRepository",
    "SQLAlchemyPlanStepRepository",
    "SQLAlchemyResearchRepository",
    "SQLAlchemySubTaskRepository",
]
