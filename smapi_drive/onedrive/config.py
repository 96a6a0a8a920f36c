"""
OneDrive (Microsoft Graph) 特定配置
"""
from dataclasses import dataclass


@dataclass
class GraphConfig:
    """Microsoft Graph 配置"""

    # API 端点
    GRAPH_API_URI: str = "https://graph.microsoft.com/v1.0/"
    DRIVE_ROOT: str = "/me/drive/root"
    DRIVE_APPFOLDER: str = "/drive/special/approot"
    DRIVE_ITEMS: str = "/me/drive/items"

    # 认证端点
    AUTH_API_URI: str = "https://login.microsoftonline.com/common/oauth2/v2.0/"
    CLIENT_ID: str = ""

    # 授权范围
    SCOPE_FULL_DRIVE: str = "user.read files.read offline_access"
    SCOPE_APPFOLDER: str = "user.read Files.ReadWrite.AppFolder offline_access"

    # 网络配置
    DEFAULT_TIMEOUT: float = 30.0

    # 令牌存储上限（SMAPI token 字段）
    TOKEN_MAX_LENGTH: int = 2048

    # 子项少于该数量的文件夹可以整体播放
    CAN_PLAY_COUNT: int = 100

    # 每页超过该数量时只请求 id 字段
    SELECT_ID_THRESHOLD: int = 100

    @property
    def device_code_url(self) -> str:
        return f"{self.AUTH_API_URI}devicecode"

    @property
    def token_url(self) -> str:
        return f"{self.AUTH_API_URI}token"

    def get_scope(self, use_app_folder: bool = False) -> str:
        """根据是否只访问应用文件夹选择授权范围"""
        return self.SCOPE_APPFOLDER if use_app_folder else self.SCOPE_FULL_DRIVE


# 默认配置实例
default_config = GraphConfig()
