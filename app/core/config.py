"""
全局配置模块

使用 Pydantic Settings 管理配置
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from smapi_drive.onedrive.config import GraphConfig


class GraphSettings(BaseSettings):
    """Microsoft Graph 配置"""
    model_config = SettingsConfigDict(env_prefix="GRAPH_")

    api_uri: str = Field(default=GraphConfig.GRAPH_API_URI, alias="GRAPH_API_URI")
    auth_uri: str = Field(default=GraphConfig.AUTH_API_URI, alias="AUTH_API_URI")
    client_id: str = Field(default="", alias="GRAPH_CLIENT_ID")

    # 上游请求超时（秒）
    timeout: float = Field(default=GraphConfig.DEFAULT_TIMEOUT, alias="GRAPH_TIMEOUT")


class GatewaySettings(BaseSettings):
    """网关服务配置"""
    model_config = SettingsConfigDict(env_prefix="GATEWAY_")

    host: str = Field(default="0.0.0.0", alias="GATEWAY_HOST")
    port: int = Field(default=8080, alias="GATEWAY_PORT")
    debug: bool = Field(default=False, alias="GATEWAY_DEBUG")

    # CORS 配置
    enable_cors: bool = Field(default=False, alias="ENABLE_CORS")
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")


class LogSettings(BaseSettings):
    """日志配置"""
    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
        alias="LOG_FORMAT"
    )
    # 日志文件（未配置时只输出到控制台）
    file: Optional[Path] = Field(default=None, alias="LOG_FILE")


class Settings(BaseSettings):
    """应用配置"""

    # Graph 配置
    graph: GraphSettings = Field(default_factory=GraphSettings)

    # 网关配置
    gateway: GatewaySettings = Field(default_factory=GatewaySettings)

    # 日志配置
    log: LogSettings = Field(default_factory=LogSettings)

    def graph_config(self) -> GraphConfig:
        """转换为 Provider 使用的配置"""
        return GraphConfig(
            GRAPH_API_URI=_with_trailing_slash(self.graph.api_uri),
            AUTH_API_URI=_with_trailing_slash(self.graph.auth_uri),
            CLIENT_ID=self.graph.client_id,
            DEFAULT_TIMEOUT=self.graph.timeout,
        )


def _with_trailing_slash(uri: str) -> str:
    return uri if uri.endswith("/") else f"{uri}/"


@lru_cache
def get_settings() -> Settings:
    """获取配置实例（缓存）"""
    return Settings()
