"""执行 Agent 的类型枚举"""

from enum import Enum


class ExecutionType(str, Enum):
    """执行请求类型"""

    CODE_GENERATION = "code_generation"
    SCRIPT_EXECUTION = "script_execution"
    API_CALL = "api_call"
    FILE_CREATION = "file_creation"
    ENVIRONMENT_SETUP = "environment_setup"


class ExecutionOutputType(str, Enum):
    """执行结果输出类型"""

    CODE = "code"
    FILE = "file"
    API_RESPONSE = "api_response"
    COMMAND_OUTPUT = "command_output"
    ERROR = "error"


# 可被部署 Agent 使用的执行类型
DEPLOYABLE_EXECUTION_TYPES: tuple[ExecutionType, ...] = (
    ExecutionType.CODE_GENERATION,
    ExecutionType.FILE_CREATION,
)
