"""PlanPilot - 目标拆解与模拟 Agent 编排"""

__version__ = "0.1.0"
