"""
SMAPI 操作处理

每个协议操作对应一个方法，输入为已解析的参数和凭证头，输出为可直接序列化的字典。
传输层（SOAP、JSON 等）只负责路由和序列化。
"""
import logging
from typing import Any, Dict, Mapping, Optional

from .core.exceptions import ItemNotFoundError, SessionInvalidError
from .core.models import CredentialBundle, ItemType
from .onedrive.auth import DeviceLinkAuth
from .onedrive.client import GraphClient
from .onedrive.codec import decompress_token
from .onedrive.config import GraphConfig
from .onedrive.translator import CatalogTranslator

logger = logging.getLogger(__name__)

SEARCH_ID = "search"
FILES_SEARCH_ID = "files"


def credentials_from_headers(headers: Optional[Mapping[str, Any]]) -> CredentialBundle:
    """从 SMAPI 凭证头中读取 loginToken

    Raises:
        SessionInvalidError: 缺少 credentials 或 loginToken
    """
    credentials = (headers or {}).get("credentials") or {}
    login_token = credentials.get("loginToken") or {}

    token = login_token.get("token")
    if not token:
        raise SessionInvalidError("Missing login token")

    return CredentialBundle(
        household_id=login_token.get("householdId"),
        access_token=decompress_token(token),
        refresh_token=login_token.get("key"),
    )


class SmapiService:
    """SMAPI 操作集合"""

    def __init__(self, config: GraphConfig = None, client: GraphClient = None):
        self.client = client or GraphClient(config)
        self.translator = CatalogTranslator(self.client)
        self.auth = DeviceLinkAuth(self.client)

    # ==================== 浏览 ====================

    async def get_metadata(
        self,
        id: str,
        index: int,
        count: int,
        headers: Optional[Mapping[str, Any]],
        use_app_folder: bool = False
    ) -> Dict[str, Any]:
        logger.debug(f"getMetadata id:{id} count:{count} index:{index}")
        credentials = credentials_from_headers(headers)

        if id == SEARCH_ID:
            return {
                "getMetadataResult": {
                    "index": index,
                    "count": 1,
                    "total": 1,
                    "mediaCollection": [
                        {
                            "id": FILES_SEARCH_ID,
                            "title": "Files",
                            "itemType": ItemType.SEARCH.value,
                            "canPlay": False,
                        }
                    ],
                }
            }

        result = await self.translator.list_children(id, count, index, credentials, use_app_folder)
        if result is None:
            raise ItemNotFoundError(f"Unknown container id: {id}")

        return {"getMetadataResult": result.to_dict(index)}

    async def search(
        self,
        id: str,
        term: str,
        index: int,
        count: int,
        headers: Optional[Mapping[str, Any]]
    ) -> Dict[str, Any]:
        logger.debug(f"search id:{id} count:{count} index:{index}")
        credentials = credentials_from_headers(headers)

        result = await self.translator.search(term, count, index, credentials)
        return {"searchResult": result.to_dict(index)}

    async def get_media_metadata(self, id: str, headers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        logger.debug(f"getMediaMetadata id:{id}")
        credentials = credentials_from_headers(headers)

        metadata = await self.translator.get_track_metadata(id, credentials)
        return {"getMediaMetadataResult": metadata.to_dict()}

    async def get_media_uri(self, id: str, headers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        logger.debug(f"getMediaURI id:{id}")
        credentials = credentials_from_headers(headers)

        uri = await self.translator.get_media_uri(id, credentials)
        return {"getMediaURIResult": uri}

    async def get_last_update(self, headers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        logger.debug("getLastUpdate")
        credentials = credentials_from_headers(headers)

        last_update = await self.translator.get_last_update(credentials)
        return {"catalog": last_update}

    # ==================== 账号关联 ====================

    async def get_device_link_code(self, household_id: str, use_app_folder: bool = False) -> Dict[str, Any]:
        logger.debug("getDeviceLinkCode")
        link_code = await self.auth.request_device_code(household_id, use_app_folder)
        return {
            "linkCode": link_code.user_code,
            "regUrl": link_code.verification_uri,
            "linkDeviceId": link_code.device_code,
            "showLinkCode": True,
        }

    async def get_device_auth_token(self, household_id: str, link_device_id: str) -> Dict[str, Any]:
        logger.debug("getDeviceAuthToken")
        token = await self.auth.poll_for_token(household_id, link_device_id)
        return {
            "authToken": token.access_token,
            "privateKey": token.refresh_token,
        }

    async def refresh_auth_token(
        self,
        headers: Optional[Mapping[str, Any]],
        use_app_folder: bool = False
    ) -> Dict[str, Any]:
        logger.debug("refreshAuthToken")
        credentials = credentials_from_headers(headers)

        refreshed = await self.auth.refresh_token(credentials, use_app_folder)
        return {
            "refreshAuthTokenResult": {
                "authToken": refreshed.access_token,
                "privateKey": refreshed.refresh_token,
            }
        }
