import asyncio
import json

import pytest
import requests
import responses
from pydantic import ValidationError

from bluebubbles.client.client import BlueBubblesClient
from bluebubbles.client.encoding import MULTIPART_FORM_DATA
from bluebubbles.models.entities import ChatEntity
from bluebubbles.models.envelope import ApiResponse, QueryMetadata
from bluebubbles.models.requests import MessageTextRequest

BASE = "http://bb.test:1234"


# --- FIXTURES ---
# Logic: Avoids repeating setup code in every test.
@pytest.fixture
def client():
    return BlueBubblesClient(server_url=BASE, password="p@ss word")


# --- 1. POSITIVE TESTING (The Contract) ---
@responses.activate
def test_request_success(client):
    # Logic: Prove the client decodes a standard envelope and keeps the raw body.
    body = {"status": 200, "message": "Ping received!", "data": "pong"}
    responses.add(responses.GET, f"{BASE}/api/v1/ping", json=body, status=200)

    result = client.get("/api/v1/ping", data_type=str)

    assert result.status == 200
    assert result.message == "Ping received!"
    assert result.data == "pong"
    assert result.error is None
    assert result.succeeded
    assert result.exception is None
    assert json.loads(result.raw_text) == body


@responses.activate
def test_password_is_first_query_parameter(client):
    responses.add(
        responses.GET,
        f"{BASE}/api/v1/chat/count",
        json={"status": 200, "message": "ok"},
    )

    client.get("/api/v1/chat/count", "with=x&limit=5")

    url = responses.calls[0].request.url
    assert url == f"{BASE}/api/v1/chat/count?password=p%40ss%20word&with=x&limit=5"


@responses.activate
def test_request_typed_data_and_metadata(client):
    # Logic: Payload and metadata shapes come from the caller, not from the JSON.
    responses.add(
        responses.POST,
        f"{BASE}/api/v1/chat/query",
        json={
            "status": 200,
            "message": "Success",
            "data": [{"guid": "iMessage;-;+15550001111", "displayName": "Ops"}],
            "metadata": {"limit": 1, "offset": 0, "total": 12},
        },
    )

    result = client.post(
        "/api/v1/chat/query",
        {"limit": 1},
        data_type=list[ChatEntity],
        metadata_type=QueryMetadata,
    )

    assert isinstance(result.data[0], ChatEntity)
    assert result.data[0].display_name == "Ops"
    assert result.metadata == QueryMetadata(limit=1, offset=0, total=12)


@responses.activate
def test_json_body_is_sent_with_content_type(client):
    responses.add(
        responses.POST,
        f"{BASE}/api/v1/message/text",
        json={"status": 200, "message": "ok"},
    )
    request = MessageTextRequest(chat_guid="chat-1", message="hello", temp_guid="temp-1")

    client.post("/api/v1/message/text", request)

    sent = responses.calls[0].request
    assert sent.headers["Content-Type"] == "application/json"
    assert json.loads(sent.body) == {
        "chatGuid": "chat-1",
        "tempGuid": "temp-1",
        "message": "hello",
        "method": "apple-script",
        "subject": None,
        "effectId": None,
        "selectedMessageGuid": None,
    }


@responses.activate
def test_no_body_sets_no_content_type(client):
    responses.add(
        responses.POST,
        f"{BASE}/api/v1/mac/lock",
        json={"status": 200, "message": "ok"},
    )

    client.post("/api/v1/mac/lock")

    sent = responses.calls[0].request
    assert sent.body is None
    assert "Content-Type" not in sent.headers


@responses.activate
def test_multipart_content_type_carries_boundary(client):
    responses.add(
        responses.POST,
        f"{BASE}/api/v1/message/attachment",
        json={"status": 200, "message": "ok"},
    )

    client.post(
        "/api/v1/message/attachment", {"chatGuid": "c", "name": "a.txt"}, MULTIPART_FORM_DATA
    )

    sent = responses.calls[0].request
    content_type = sent.headers["Content-Type"]
    assert content_type.startswith("multipart/form-data; boundary=")
    boundary = content_type.split("boundary=", 1)[1]
    assert sent.body.endswith(f"--{boundary}--".encode())


@responses.activate
def test_echoed_json_body_round_trips(client):
    # Logic: Encoding a body then decoding an envelope that echoes it gives it back.
    def echo(request):
        envelope = {"status": 200, "message": "ok", "data": json.loads(request.body)}
        return 200, {}, json.dumps(envelope)

    responses.add_callback(
        responses.POST,
        f"{BASE}/api/v1/message/text",
        callback=echo,
        content_type="application/json",
    )
    request = MessageTextRequest(chat_guid="chat-1", message="hi", subject="re")

    result = client.post("/api/v1/message/text", request, data_type=MessageTextRequest)

    assert result.data == request


# --- 2. NEGATIVE TESTING (The Fragility) ---
@responses.activate
def test_error_status_with_envelope_is_not_raised(client):
    # Logic: A 4xx carrying the server's envelope is decoded, not raised.
    responses.add(
        responses.GET,
        f"{BASE}/api/v1/ping",
        json={
            "status": 400,
            "message": "bad",
            "error": {"type": "X", "message": "Y"},
        },
        status=400,
    )

    result = client.get("/api/v1/ping")

    assert result.status == 400
    assert result.error.type == "X"
    assert result.error.message == "Y"
    assert not result.succeeded
    assert isinstance(result.exception, requests.exceptions.HTTPError)
    assert result.exception.response.status_code == 400


@responses.activate
def test_connection_failure_is_raised_unmodified(client):
    # Logic: With no response at all there is nothing to decode.
    refused = requests.exceptions.ConnectionError("connection refused")
    responses.add(responses.GET, f"{BASE}/api/v1/ping", body=refused)

    with pytest.raises(requests.exceptions.ConnectionError) as excinfo:
        client.get("/api/v1/ping")

    assert excinfo.value is refused
    assert len(responses.calls) == 1


@responses.activate
def test_malformed_json_raises(client):
    responses.add(
        responses.GET,
        f"{BASE}/api/v1/ping",
        body="<html>502 Bad Gateway</html>",
        status=502,
    )

    with pytest.raises(ValidationError):
        client.get("/api/v1/ping")


@responses.activate
def test_payload_of_wrong_shape_raises(client):
    responses.add(
        responses.GET,
        f"{BASE}/api/v1/chat/count",
        json={"status": 200, "message": "ok", "data": "not a list"},
    )

    with pytest.raises(ValidationError):
        client.get("/api/v1/chat/count", data_type=list[ChatEntity])


@responses.activate
def test_open_raises_on_error_status(client):
    responses.add(responses.GET, f"{BASE}/api/v1/chat/x/icon", status=404)

    with pytest.raises(requests.exceptions.HTTPError):
        client.open("GET", "/api/v1/chat/x/icon")


def test_client_requires_server_url_and_password():
    with pytest.raises(ValueError):
        BlueBubblesClient(server_url="", password="pw")
    with pytest.raises(ValueError):
        BlueBubblesClient(server_url=BASE, password=None)


# --- 3. CONSTRAINTS (The Limits) ---
@responses.activate
def test_envelope_without_data(client):
    # Logic: Prove the client handles envelopes carrying no data.
    responses.add(
        responses.DELETE,
        f"{BASE}/api/v1/chat/c1",
        json={"status": 200, "message": "Successfully deleted chat!"},
    )

    result = client.delete("/api/v1/chat/c1")

    assert result.data is None
    assert result.metadata is None


@responses.activate
def test_envelope_is_immutable(client):
    responses.add(
        responses.GET, f"{BASE}/api/v1/ping", json={"status": 200, "message": "ok"}
    )

    result = client.get("/api/v1/ping")

    with pytest.raises(ValidationError):
        result.status = 500


@responses.activate
def test_transient_fields_are_not_serialized(client):
    responses.add(
        responses.GET,
        f"{BASE}/api/v1/ping",
        json={"status": 401, "message": "no", "error": {"type": "Unauthorized"}},
        status=401,
    )

    result = client.get("/api/v1/ping")
    dumped = result.model_dump()

    assert "exception" not in dumped
    assert "raw_text" not in dumped
    assert "_exception" not in dumped


# --- 4. THE BRANCHES (Sync vs Async) ---
@responses.activate
def test_async_matches_sync(client):
    # Logic: Both paths run the same pipeline, so identical inputs give equal envelopes.
    responses.add(
        responses.GET,
        f"{BASE}/api/v1/chat/count",
        json={"status": 200, "message": "ok", "data": {"total": 3}},
    )

    sync_result = client.get("/api/v1/chat/count")
    async_result = asyncio.run(client.get_async("/api/v1/chat/count"))

    assert async_result == sync_result
    assert async_result.raw_text == sync_result.raw_text
    assert len(responses.calls) == 2


@responses.activate
def test_async_matches_sync_on_error_status(client):
    # Logic: Each call carries its own HTTPError, yet the envelopes still compare equal.
    responses.add(
        responses.GET,
        f"{BASE}/api/v1/ping",
        json={"status": 400, "message": "bad", "error": {"type": "X", "message": "Y"}},
        status=400,
    )

    sync_result = client.get("/api/v1/ping")
    async_result = asyncio.run(client.get_async("/api/v1/ping"))

    assert sync_result.exception is not async_result.exception
    assert isinstance(async_result.exception, requests.exceptions.HTTPError)
    assert async_result == sync_result


def test_envelopes_with_different_exceptions_differ():
    body = '{"status": 400, "message": "bad"}'

    first = ApiResponse.from_text(body, ValueError("one"))
    second = ApiResponse.from_text(body, ValueError("two"))

    assert first != second
    assert first == ApiResponse.from_text(body, ValueError("one"))


@responses.activate
def test_async_connection_failure_is_raised(client):
    responses.add(
        responses.GET,
        f"{BASE}/api/v1/ping",
        body=requests.exceptions.ConnectionError("refused"),
    )

    with pytest.raises(requests.exceptions.ConnectionError):
        asyncio.run(client.request_async("GET", "/api/v1/ping"))
