"""GoalStatus 枚举 - 用户目标状态

状态流转：PLANNING → IN_PROGRESS → COMPLETED
"""

from enum import Enum


class GoalStatus(str, Enum):
    PLANNING = "planning"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
