"""
SMAPI 操作处理测试
"""
import asyncio

import pytest

from conftest import make_jwt
from smapi_drive.core.exceptions import ItemNotFoundError, LinkPendingError, SessionInvalidError
from smapi_drive.onedrive.codec import compress_token
from smapi_drive.service import SmapiService, credentials_from_headers


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def service(graph):
    return SmapiService(client=graph.client())


class TestCredentials:

    @pytest.mark.parametrize("headers", [
        None,
        {},
        {"credentials": None},
        {"credentials": {"deviceId": "x"}},
        {"credentials": {"loginToken": {"householdId": "h"}}},
        {"credentials": {"loginToken": {"token": "", "householdId": "h"}}},
    ])
    def test_missing_login_token(self, headers):
        with pytest.raises(SessionInvalidError):
            credentials_from_headers(headers)

    def test_reads_login_token(self, login_headers):
        credentials = credentials_from_headers(login_headers)

        assert credentials.household_id == "Sonos_household_1"
        assert credentials.access_token == "access-token"
        assert credentials.refresh_token == "refresh-token"

    def test_decompresses_token(self):
        access_token = make_jwt({"data": "z" * 1600})
        headers = {"credentials": {"loginToken": {"token": compress_token(access_token), "key": "k"}}}

        assert credentials_from_headers(headers).access_token == access_token


class TestGetMetadata:

    def test_search_root_is_static(self, service, graph, login_headers):
        result = run(service.get_metadata("search", 0, 100, login_headers))

        assert graph.requests == []
        assert result["getMetadataResult"] == {
            "index": 0,
            "count": 1,
            "total": 1,
            "mediaCollection": [
                {"id": "files", "title": "Files", "itemType": "search", "canPlay": False}
            ],
        }

    def test_requires_credentials(self, service):
        with pytest.raises(SessionInvalidError):
            run(service.get_metadata("root", 0, 100, None))

    def test_root_listing(self, service, graph, login_headers):
        graph.queue({"value": [{"id": "D1", "name": "Music", "folder": {"childCount": 5}}]})

        result = run(service.get_metadata("root", 0, 100, login_headers))

        assert result["getMetadataResult"] == {
            "index": 0,
            "count": 1,
            "total": 1,
            "mediaCollection": [
                {
                    "id": "folder:D1",
                    "itemType": "collection",
                    "title": "Music",
                    "canPlay": True,
                    "canEnumerate": True,
                }
            ],
        }

    def test_app_folder_root(self, service, graph, login_headers):
        graph.queue({"value": []})

        run(service.get_metadata("root", 0, 100, login_headers, use_app_folder=True))

        assert graph.requests[0].url.path.endswith("/drive/special/approot/children")

    def test_unknown_id(self, service, login_headers):
        with pytest.raises(ItemNotFoundError):
            run(service.get_metadata("audio:A1", 0, 100, login_headers))


def test_search(service, graph, login_headers):
    graph.queue({"value": [{"id": "A1", "name": "song.flac", "file": {}}], "@odata.count": 12})

    result = run(service.search("files", "song", 0, 10, login_headers))

    assert result["searchResult"]["total"] == 12
    assert result["searchResult"]["mediaCollection"][0]["id"] == "audio:A1"


def test_get_media_metadata(service, graph, login_headers):
    graph.queue({"id": "A1", "name": "song.flac", "file": {"mimeType": "application/octet-stream"}})

    result = run(service.get_media_metadata("audio:A1", login_headers))

    assert result["getMediaMetadataResult"]["mimeType"] == "audio/flac"
    assert result["getMediaMetadataResult"]["itemType"] == "track"


def test_get_media_uri(service, graph, login_headers):
    graph.queue({"id": "A1", "name": "a.mp3", "file": {}, "@microsoft.graph.downloadUrl": "https://dl/A1"})

    result = run(service.get_media_uri("audio:A1", login_headers))

    assert graph.requests[0].url.path.endswith("/me/drive/items/A1")
    assert result == {"getMediaURIResult": "https://dl/A1"}


def test_get_last_update(service, graph, login_headers):
    graph.queue({"value": [{"lastModifiedDateTime": "2024-05-01T10:00:00Z"}]})

    assert run(service.get_last_update(login_headers)) == {"catalog": "2024-05-01T10:00:00Z"}


def test_get_last_update_empty_delta(service, graph, login_headers):
    graph.queue({"value": []})

    assert run(service.get_last_update(login_headers)) == {"catalog": None}


def test_get_device_link_code(service, graph):
    graph.queue({
        "user_code": "ABCD-1234",
        "verification_uri": "https://microsoft.com/devicelogin",
        "device_code": "device-code-1",
    })

    result = run(service.get_device_link_code("household"))

    assert result == {
        "linkCode": "ABCD-1234",
        "regUrl": "https://microsoft.com/devicelogin",
        "linkDeviceId": "device-code-1",
        "showLinkCode": True,
    }


def test_get_device_auth_token(service, graph):
    graph.queue({"access_token": "access-1", "refresh_token": "refresh-1"})

    result = run(service.get_device_auth_token("household", "device-code-1"))

    assert result == {"authToken": "access-1", "privateKey": "refresh-1"}


def test_get_device_auth_token_pending(service, graph):
    graph.queue({"error": "authorization_pending"}, status_code=400)

    with pytest.raises(LinkPendingError):
        run(service.get_device_auth_token("household", "device-code-1"))


def test_refresh_auth_token(service, graph, login_headers):
    graph.queue({"access_token": "access-2", "refresh_token": "refresh-2"})

    result = run(service.refresh_auth_token(login_headers))

    assert result == {"refreshAuthTokenResult": {"authToken": "access-2", "privateKey": "refresh-2"}}
