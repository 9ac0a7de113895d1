"""应用配置模块 - 使用 Pydantic Settings 管理环境变量"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置类"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="PlanPilot", description="应用名称")
    app_version: str = Field(default="0.1.0", description="应用版本")
    env: Literal["development", "production", "test"] = Field(
        default="development", description="运行环境"
    )
    debug: bool = Field(default=False, description="调试模式")

    # Server
    host: str = Field(default="0.0.0.0", description="服务器地址")
    port: int = Field(default=8000, description="服务器端口")
    reload: bool = Field(default=False, description="热重载")

    # Database
    database_url: str = Field(
        default="sqlite:///./planpilot.db",
        description="数据库连接 URL",
    )

    # CORS
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="允许的跨域源",
    )

    # Simulated agents
    agent_latency_scale: float = Field(
        default=1.0, ge=0.0, description="模拟 Agent 延迟的缩放系数（0 表示不等待）"
    )

    # Auto-start workflow
    default_auto_progress_delay: float = Field(
        default=5.0, ge=0.0, description="每个阶段完成后的默认等待时间（秒）"
    )
    pause_between_steps_seconds: float = Field(
        default=2.0, ge=0.0, description="步骤之间的暂停时间（秒）"
    )
    default_phase_failure_policy: Literal["skip_step", "continue_step"] = Field(
        default="skip_step", description="阶段失败后的处理策略"
    )
    auto_start_retention_seconds: float = Field(
        default=600.0, ge=0.0, description="已结束运行的状态保留时间（秒）"
    )
    auto_start_shutdown_grace_seconds: float = Field(
        default=5.0, ge=0.0, description="关闭时等待运行协作式停止的时间（秒）"
    )

    # Logging
    log_level: str = Field(default="INFO", description="日志级别")
    log_format: Literal["json", "text"] = Field(default="text", description="日志格式")


# 全局配置实例
settings = Settings()
