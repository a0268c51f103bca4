import io
import json

import pytest

from bluebubbles.client.encoding import (
    JSON,
    MULTIPART_FORM_DATA,
    MultipartField,
    encode_body,
    write_multipart,
)
from bluebubbles.models.requests import (
    ChatCreateRequest,
    MessageAttachmentRequest,
    MessageReaction,
    MessageReactRequest,
    MessageQueryRequest,
)


# --- NO BODY ---
@pytest.mark.parametrize("content_type", [JSON, MULTIPART_FORM_DATA, "text/plain"])
def test_no_body_is_not_encoded(content_type):
    assert encode_body(None, content_type) is None


# --- JSON ---
def test_json_uses_wire_names():
    request = ChatCreateRequest(addresses=["+15550001111"], message="hi", temp_guid="temp-1")

    encoded = encode_body(request)

    assert encoded.content_type == "application/json"
    assert json.loads(encoded.content) == {
        "addresses": ["+15550001111"],
        "message": "hi",
        "method": "apple-script",
        "service": "iMessage",
        "tempGuid": "temp-1",
    }


def test_json_keeps_declared_field_order():
    request = MessageReactRequest(
        chat_guid="c", selected_message_guid="m", reaction=MessageReaction.REMOVE_LIKE
    )

    encoded = encode_body(request, JSON)

    assert list(json.loads(encoded.content)) == ["chatGuid", "selectedMessageGuid", "reaction"]
    assert json.loads(encoded.content)["reaction"] == "-like"


def test_json_query_request_with_keyword_field():
    request = MessageQueryRequest(limit=5, with_=["chat", "attachment"])

    payload = json.loads(encode_body(request).content)

    assert payload["with"] == ["chat", "attachment"]
    assert payload["sort"] == "DESC"
    assert "with_" not in payload


def test_json_plain_dict():
    encoded = encode_body({"ids": [1, 2]})

    assert json.loads(encoded.content) == {"ids": [1, 2]}


# --- MULTIPART ---
def test_multipart_boundary_count_and_terminator():
    fields = [MultipartField("a", "1"), MultipartField("b", b"\x00\x01"), MultipartField("c", 3)]

    content, boundary = write_multipart(fields)

    assert content.count(boundary.encode()) == len(fields) + 1
    assert content.endswith(f"{boundary}--".encode())


def test_multipart_layout():
    fields = [MultipartField("chatGuid", "c1"), MultipartField("name", "a.txt")]

    content, _ = write_multipart(fields, boundary="XYZ")

    assert content == (
        b"--XYZ\r\n"
        b'Content-Disposition: form-data; name="chatGuid"\r\n'
        b"\r\n"
        b"c1\r\n"
        b"--XYZ\r\n"
        b'Content-Disposition: form-data; name="name"\r\n'
        b"\r\n"
        b"a.txt\r\n"
        b"--XYZ--"
    )


def test_multipart_stream_is_copied_and_left_open():
    stream = io.BytesIO(b"\x89PNG\r\n\x1a\nbinary")

    content, _ = write_multipart([MultipartField("attachment", stream)], boundary="B")

    assert b"\x89PNG\r\n\x1a\nbinary\r\n--B--" in content
    assert not stream.closed


def test_multipart_filename_is_emitted_when_set():
    content, _ = write_multipart(
        [MultipartField("attachment", b"x", filename="cat.png")], boundary="B"
    )

    assert b'name="attachment"; filename="cat.png"' in content


def test_multipart_attachment_request_field_order():
    request = MessageAttachmentRequest(
        chat_guid="iMessage;-;+1", name="cat.png", attachment=b"meow", temp_guid="temp-9"
    )

    encoded = encode_body(request, MULTIPART_FORM_DATA)

    boundary = encoded.content_type.split("; boundary=", 1)[1]
    assert encoded.content_type == f"multipart/form-data; boundary={boundary}"
    names = [
        line.split(b'name="', 1)[1].split(b'"', 1)[0]
        for line in encoded.content.split(b"\r\n")
        if line.startswith(b"Content-Disposition")
    ]
    assert names == [b"chatGuid", b"tempGuid", b"name", b"attachment"]
    assert encoded.content.count(boundary.encode()) == 5


def test_multipart_accepts_pairs():
    encoded = encode_body([("a", "1"), MultipartField("b", "2")], MULTIPART_FORM_DATA)

    assert b'name="a"' in encoded.content
    assert b'name="b"' in encoded.content


def test_multipart_rejects_unsupported_body():
    with pytest.raises(TypeError):
        encode_body(42, MULTIPART_FORM_DATA)


def test_attachment_request_requires_content():
    with pytest.raises(ValueError):
        MessageAttachmentRequest(chat_guid="c", name="n", attachment=None)


# --- RAW ---
def test_raw_bytes_written_verbatim():
    encoded = encode_body(b"\xff\x00raw", "application/octet-stream")

    assert encoded.content == b"\xff\x00raw"
    assert encoded.content_type == "application/octet-stream"


def test_raw_other_values_written_as_text():
    assert encode_body("héllo", "text/plain").content == "héllo".encode("utf-8")
    assert encode_body(42, "text/plain").content == b"42"
