"""AgentDomain 枚举 - 三类模拟 Agent

- RESEARCH: 研究（关键词匹配的研究摘要）
- EXECUTION: 执行（模板生成的代码/脚本输出）
- DEPLOYMENT: 部署（模板生成的构建日志与站点地址）

Workflow Runner 按 RESEARCH → EXECUTION → DEPLOYMENT 的顺序执行阶段。
"""

from enum import Enum


class AgentDomain(str, Enum):
    RESEARCH = "research"
    EXECUTION = "execution"
    DEPLOYMENT = "deployment"


# Workflow Runner 的阶段顺序
PHASE_ORDER: tuple[AgentDomain, ...] = (
    AgentDomain.RESEARCH,
    AgentDomain.EXECUTION,
    AgentDomain.DEPLOYMENT,
)
