"""
JSON 传输层测试
"""
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_smapi_service
from app.main import create_app
from smapi_drive.service import SmapiService


@pytest.fixture
def client(graph):
    app = create_app()
    app.dependency_overrides[get_smapi_service] = lambda: SmapiService(client=graph.client())
    with TestClient(app) as test_client:
        yield test_client


def test_get_metadata(client, graph, login_headers):
    graph.queue({"value": [{"id": "A1", "name": "a.flac", "file": {}}]})

    response = client.post("/smapi/getMetadata", json={"id": "root", "index": 0, "count": 10, "headers": login_headers})

    assert response.status_code == 200
    result = response.json()["getMetadataResult"]
    assert result["mediaCollection"][0]["id"] == "audio:A1"
    assert graph.requests[0].url.path == "/v1.0/me/drive/root/children"


def test_app_folder_route(client, graph, login_headers):
    graph.queue({"value": []})

    response = client.post("/smapi/appfolder/getMetadata", json={"id": "root", "headers": login_headers})

    assert response.status_code == 200
    assert graph.requests[0].url.path == "/v1.0/drive/special/approot/children"


def test_app_folder_link_code_scope(client, graph):
    graph.queue({"user_code": "C", "verification_uri": "https://v", "device_code": "D"})

    response = client.post("/smapi/appfolder/getDeviceLinkCode", json={"householdId": "h"})

    assert response.status_code == 200
    assert response.json()["linkDeviceId"] == "D"
    assert "Files.ReadWrite.AppFolder" in graph.requests[0].content.decode().replace("+", " ")


def test_missing_credentials_fault(client):
    response = client.post("/smapi/getMetadata", json={"id": "root"})

    assert response.status_code == 500
    assert response.json()["faultcode"] == "Client.SessionIdInvalid"


def test_link_pending_fault(client, graph):
    graph.queue({"error": "authorization_pending"}, status_code=400)

    response = client.post(
        "/smapi/getDeviceAuthToken",
        json={"householdId": "h", "linkCode": "C", "linkDeviceId": "D"},
    )

    assert response.status_code == 500
    assert response.json()["faultcode"] == "Client.NOT_LINKED_RETRY"


def test_token_refresh_fault(client, graph, login_headers):
    graph.queue({"error": {"code": "InvalidAuthenticationToken"}}, status_code=401)

    response = client.post("/smapi/getMediaURI", json={"id": "audio:A1", "headers": login_headers})

    assert response.json()["faultcode"] == "Client.TokenRefreshRequired"


def test_upstream_fault_carries_details(client, graph, login_headers):
    graph.queue({"error": {"code": "serviceNotAvailable"}}, status_code=503)

    response = client.post("/smapi/search", json={"term": "song", "headers": login_headers})

    body = response.json()
    assert body["faultcode"] == "Client.ServiceUnknownError"
    assert body["detail"] == {"status": 503, "payload": {"error": {"code": "serviceNotAvailable"}}}


def test_item_not_found_fault(client, login_headers):
    response = client.post("/smapi/getMetadata", json={"id": "bogus", "headers": login_headers})

    assert response.json()["faultcode"] == "Client.ItemNotFound"
