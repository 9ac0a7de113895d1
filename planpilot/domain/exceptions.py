"""领域层异常定义

异常分层：
- DomainError: 业务规则违反（API 层统一转换为 4xx）
- NotFoundError: 实体不存在（404）
- Agent 相关异常：描述一次 Agent 调用在哪个环节失败

Agent 调用的失败范围：
- AgentInvocationError（RequestCreationError）: 请求记录创建失败，向调用方传播
- ContentGenerationError: 内容生成失败，在 Recorder 内部恢复
- ResultPersistenceError: 结果写入失败，记录日志后吞掉
- StepPhaseError: Workflow Runner 中某个步骤的阶段失败，记录日志后继续下一步
"""


class DomainError(Exception):
    """领域层异常基类

    用途：
    - 表示业务规则违反（如：goal 文本不能为空）
    - 表示领域不变式违反（如：状态流转非法）

    示例：
        if not goal_text.strip():
            raise DomainError("goal 不能为空")
    """

    pass


class NotFoundError(DomainError):
    """实体不存在异常

    用于 Repository 的 get_by_id() 方法，API 层统一返回 404。

    参数：
        entity_type: 实体类型（如："Goal"、"PlanStep"）
        entity_id: 实体 ID
    """

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} 不存在: {entity_id}")


# EntityNotFoundError是NotFoundError的别名，用于Repository层
EntityNotFoundError = NotFoundError


class AgentInvocationError(DomainError):
    """Agent 请求记录创建失败

    这是一次 Agent 调用中唯一会传播给调用方的异常：
    请求记录都没写进去，调用方不应继续。

    参数：
        domain: Agent 领域（research / execution / deployment）
        plan_id: 所属 Plan Step ID
        reason: 原始错误描述
    """

    def __init__(self, domain: str, plan_id: str, reason: str):
        self.domain = domain
        self.plan_id = plan_id
        self.reason = reason
        super().__init__(f"创建 {domain} 请求失败 (plan={plan_id}): {reason}")


RequestCreationError = AgentInvocationError


class ContentGenerationError(DomainError):
    """模板内容生成失败（如：研究查询为空、未知的执行类型）"""

    pass


class ResultPersistenceError(DomainError):
    """结果记录写入失败

    参数：
        table: 写入的表名
        reason: 原始错误描述
    """

    def __init__(self, table: str, reason: str):
        self.table = table
        self.reason = reason
        super().__init__(f"写入 {table} 失败: {reason}")


class StepPhaseError(DomainError):
    """Workflow Runner 某个步骤的某个阶段失败

    参数：
        step_id: Plan Step ID
        phase: 阶段名称
        reason: 失败原因
    """

    def __init__(self, step_id: str, phase: str, reason: str):
        self.step_id = step_id
        self.phase = phase
        self.reason = reason
        super().__init__(f"步骤 {step_id} 的 {phase} 阶段失败: {reason}")
