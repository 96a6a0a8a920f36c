"""
OneDrive 设备码认证

基于 OAuth 2.0 设备授权（device authorization grant）的账号关联流程：
申请用户码 -> 轮询换取令牌 -> 刷新令牌
"""
import logging
from typing import Optional

from ..core.exceptions import (
    LinkFailedError,
    LinkPendingError,
    SessionInvalidError,
    UpstreamError,
)
from ..core.models import CredentialBundle, DeviceAuthToken, DeviceLinkCode
from ..utils.helpers import hash_code
from .client import GraphClient
from .codec import compact_token

logger = logging.getLogger(__name__)

DEVICE_CODE_GRANT = "urn:ietf:params:oauth:grant-type:device_code"
REFRESH_TOKEN_GRANT = "refresh_token"

# 用户尚未在浏览器中完成授权时的错误码
PENDING_ERRORS = ("authorization_pending", "slow_down")


class DeviceLinkAuth:
    """设备码认证提供者

    不保存任何会话状态，device_code 由设备在每次轮询时回传
    """

    def __init__(self, client: GraphClient):
        self.client = client
        self.config = client.config

    async def request_device_code(self, household_id: str, use_app_folder: bool = False) -> DeviceLinkCode:
        """申请设备码"""
        data = await self.client.post_form(
            self.config.device_code_url,
            {
                "client_id": self.config.CLIENT_ID,
                "scope": self.config.get_scope(use_app_folder),
            },
        )

        if not all(k in data for k in ("user_code", "verification_uri", "device_code")):
            raise UpstreamError("Device code response missing required fields", payload=data)

        logger.info(f"{hash_code(household_id)}: Got verification uri")

        return DeviceLinkCode(
            user_code=data["user_code"],
            verification_uri=data["verification_uri"],
            device_code=data["device_code"],
            raw_data=data,
        )

    async def poll_for_token(self, household_id: str, device_code: str) -> DeviceAuthToken:
        """用设备码换取令牌

        Raises:
            LinkPendingError: 用户尚未完成授权，设备稍后重试
            LinkFailedError: 其他任何失败
        """
        try:
            data = await self.client.post_form(
                self.config.token_url,
                {
                    "client_id": self.config.CLIENT_ID,
                    "device_code": device_code,
                    "grant_type": DEVICE_CODE_GRANT,
                },
            )
        except UpstreamError as e:
            if e.status_code == 400 and _error_code(e.payload) in PENDING_ERRORS:
                logger.info(f"{hash_code(household_id)}: Not linked, retry")
                raise LinkPendingError(_error_code(e.payload)) from e

            logger.error(f"Error getting device auth token: {e.payload}")
            raise LinkFailedError(
                f"Device link failed: {_error_code(e.payload) or e}",
                status_code=e.status_code,
                payload=e.payload,
            ) from e

        if not data.get("access_token"):
            raise LinkFailedError("Token response missing access_token", payload=data)

        token = DeviceAuthToken(
            access_token=compact_token(data["access_token"], self.config.TOKEN_MAX_LENGTH),
            refresh_token=data.get("refresh_token"),
            raw_data=data,
        )
        logger.info(f"{hash_code(household_id)}: Got token")
        return token

    async def refresh_token(self, credentials: CredentialBundle, use_app_folder: bool = False) -> CredentialBundle:
        """刷新访问令牌

        返回的凭证不带家庭 ID，调用方自己持有
        """
        if not credentials.refresh_token:
            raise SessionInvalidError("No refresh token available")

        data = await self.client.post_form(
            self.config.token_url,
            {
                "client_id": self.config.CLIENT_ID,
                "refresh_token": credentials.refresh_token,
                "grant_type": REFRESH_TOKEN_GRANT,
                "scope": self.config.get_scope(use_app_folder),
            },
        )

        if not data.get("access_token"):
            raise UpstreamError("Refresh response missing access_token", payload=data)

        logger.info(f"{hash_code(credentials.household_id)}: Got refreshed token")

        return CredentialBundle(
            household_id=None,
            access_token=compact_token(data["access_token"], self.config.TOKEN_MAX_LENGTH),
            refresh_token=data.get("refresh_token", credentials.refresh_token),
        )


def _error_code(payload) -> Optional[str]:
    if isinstance(payload, dict):
        return payload.get("error")
    return None
