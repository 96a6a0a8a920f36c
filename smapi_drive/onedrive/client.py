"""
Microsoft Graph API 客户端

封装带 Bearer 令牌的 GET 和 OAuth 表单 POST，不涉及认证流程
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import httpx

from ..core.exceptions import TokenRefreshRequiredError, UpstreamError
from .config import GraphConfig, default_config

logger = logging.getLogger(__name__)


class GraphClient:
    """Graph API 客户端（纯 API 调用层）

    每次调用使用独立的 httpx.AsyncClient，调用结束即关闭连接
    """

    def __init__(
        self,
        config: GraphConfig = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.config = config or default_config
        self._transport = transport

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        async with httpx.AsyncClient(
            base_url=self.config.GRAPH_API_URI,
            timeout=self.config.DEFAULT_TIMEOUT,
            transport=self._transport,
        ) as client:
            yield client

    def build_params(
        self,
        path: str,
        count: int = 1,
        skip_token: Optional[str] = None
    ) -> Dict[str, Any]:
        """构造查询参数"""
        params: Dict[str, Any] = {}

        if "delta" not in path:
            params["$expand"] = "thumbnails"
        if count > 1:
            params["$top"] = count
        if skip_token:
            params["$skipToken"] = skip_token
        if count > self.config.SELECT_ID_THRESHOLD:
            params["$select"] = "id"

        return params

    async def get(
        self,
        path: str,
        access_token: str,
        count: int = 1,
        skip_token: Optional[str] = None
    ) -> Dict[str, Any]:
        """发送 Graph GET 请求

        Args:
            path: API 路径（相对 GRAPH_API_URI）
            access_token: 访问令牌（已解压）
            count: 请求条目数
            skip_token: 分页续传令牌

        Returns:
            解析后的 JSON

        Raises:
            TokenRefreshRequiredError: 上游返回 401
            UpstreamError: 其他非 2xx 或网络错误
        """
        params = self.build_params(path, count, skip_token)
        headers = {"Authorization": f"Bearer {access_token}"}

        try:
            async with self._session() as client:
                response = await client.get(path, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.warning(f"Network error during call to {path}: {e}")
            raise UpstreamError(f"Network error: {e}") from e

        if response.status_code == 401:
            logger.debug("Request not authorized, token refresh required")
            raise TokenRefreshRequiredError("Access token rejected")

        return self._parse_response(response, path)

    async def post_form(self, url: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """发送表单编码的 POST（OAuth 端点）

        Raises:
            UpstreamError: 非 2xx 或网络错误，payload 保留上游返回的错误体
        """
        data = {k: v for k, v in data.items() if v is not None}

        try:
            async with self._session() as client:
                response = await client.post(
                    url,
                    data=data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
        except httpx.HTTPError as e:
            logger.warning(f"Network error during call to {url}: {e}")
            raise UpstreamError(f"Network error: {e}") from e

        return self._parse_response(response, url)

    def _parse_response(self, response: httpx.Response, target: str) -> Dict[str, Any]:
        payload = self._decode(response)

        if response.is_success:
            if not isinstance(payload, dict):
                raise UpstreamError(
                    f"Invalid JSON response from {target}",
                    status_code=response.status_code,
                )
            return payload

        logger.error(f"Bad request {target}: {response.status_code} {payload}")
        raise UpstreamError(
            f"Upstream request failed with status {response.status_code}",
            status_code=response.status_code,
            payload=payload,
        )

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError:
            logger.error(f"JSON decode error for {response.request.url}")
            return None
