"""
测试公共夹具

GraphStub 记录发往上游的请求，并按顺序返回预设响应
"""
import base64
import json
from urllib.parse import parse_qs

import httpx
import pytest

from smapi_drive.core.models import CredentialBundle
from smapi_drive.onedrive.client import GraphClient
from smapi_drive.onedrive.config import GraphConfig


class GraphStub:
    """伪造的 Graph / 认证服务"""

    def __init__(self):
        self.responses = []
        self.requests = []

    def queue(self, body=None, status_code: int = 200, content: bytes = None) -> "GraphStub":
        self.responses.append((status_code, body, content))
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        status_code, body, content = self.responses.pop(0)
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=body)

    def client(self) -> GraphClient:
        return GraphClient(
            GraphConfig(CLIENT_ID="test-client"),
            transport=httpx.MockTransport(self),
        )

    def form(self, position: int = -1) -> dict:
        """解析某次 POST 的表单内容"""
        content = self.requests[position].content.decode()
        return {k: v[0] for k, v in parse_qs(content).items()}


def b64url(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode("utf-8")).rstrip(b"=").decode("ascii")


def make_jwt(payload: dict, header: dict = None, signature: str = "c2lnbmF0dXJl_LXNpZw") -> str:
    header = header or {"typ": "JWT", "alg": "RS256"}
    return ".".join((
        b64url(json.dumps(header, separators=(",", ":"))),
        b64url(json.dumps(payload, separators=(",", ":"), ensure_ascii=False)),
        signature,
    ))


@pytest.fixture
def graph():
    return GraphStub()


@pytest.fixture
def credentials():
    return CredentialBundle(
        household_id="Sonos_household_1",
        access_token="access-token",
        refresh_token="refresh-token",
    )


@pytest.fixture
def login_headers():
    return {
        "credentials": {
            "loginToken": {
                "token": "access-token",
                "key": "refresh-token",
                "householdId": "Sonos_household_1",
            }
        }
    }
