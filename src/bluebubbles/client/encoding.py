"""Request body encoding.

The declared content kind picks the strategy:
- application/json: pydantic serialization, wire names from field aliases.
- multipart/form-data: hand-written writer over an explicit, ordered field list.
- anything else: bytes written as-is, other values as their text.
"""

from __future__ import annotations

import io
import logging
import shutil
import time
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic_core import to_json

logger = logging.getLogger(__name__)

JSON = "application/json"
MULTIPART_FORM_DATA = "multipart/form-data"
DEFAULT_CONTENT_TYPE = JSON

CRLF = b"\r\n"


@dataclass(frozen=True)
class MultipartField:
    """One named part of a multipart/form-data body.

    `value` is a readable binary stream, a bytes-like buffer or any scalar
    (written as its text). `filename` is only emitted when set.
    """

    name: str
    value: Any
    filename: str | None = None


@dataclass(frozen=True)
class EncodedBody:
    content: bytes
    content_type: str


def new_boundary() -> str:
    # Fresh per call, so it cannot collide with a previous body's content
    return "-" * 24 + str(time.time_ns())


def encode_body(body: Any, content_type: str = DEFAULT_CONTENT_TYPE) -> EncodedBody | None:
    """Serializes a request body for the declared content type.

    Args:
        body: The payload, or None for requests without a body.
        content_type: The declared content kind.

    Returns:
        EncodedBody | None: The bytes and the final Content-Type header value,
            or None when there is no body.
    """

    if body is None:
        return None

    if content_type == JSON:
        return EncodedBody(to_json(body, by_alias=True), content_type)

    if content_type == MULTIPART_FORM_DATA:
        content, boundary = write_multipart(multipart_fields_of(body))
        return EncodedBody(content, f"{content_type}; boundary={boundary}")

    return EncodedBody(_raw_bytes(body), content_type)


def multipart_fields_of(body: Any) -> list[MultipartField]:
    """Resolves the ordered part list of a multipart body.

    Accepts an object exposing `multipart_fields()`, an ordered mapping of
    name to value, or a sequence of MultipartField / (name, value) pairs.
    """

    if hasattr(body, "multipart_fields"):
        return list(body.multipart_fields())

    if isinstance(body, Mapping):
        return [MultipartField(name, value) for name, value in body.items()]

    if isinstance(body, (list, tuple)):
        return [
            part if isinstance(part, MultipartField) else MultipartField(*part)
            for part in body
        ]

    raise TypeError(
        f"Cannot encode {type(body).__name__} as multipart/form-data; "
        "provide multipart_fields(), a mapping or a list of fields."
    )


def write_multipart(
    fields: list[MultipartField], boundary: str | None = None
) -> tuple[bytes, str]:
    """Writes a multipart/form-data body.

    Parts are written in list order. Each part is a delimiter line, a
    Content-Disposition header, a blank line, the content and a line break.
    The body ends with the closing delimiter (boundary + "--").

    Args:
        fields: The parts, in wire order.
        boundary: Boundary token; generated when omitted.

    Returns:
        tuple[bytes, str]: The body and the boundary token used.
    """

    boundary = boundary or new_boundary()
    out = io.BytesIO()

    for part in fields:
        disposition = f'Content-Disposition: form-data; name="{part.name}"'
        if part.filename is not None:
            disposition += f'; filename="{part.filename}"'

        out.write(f"--{boundary}".encode("ascii") + CRLF)
        out.write(disposition.encode("utf-8") + CRLF)
        out.write(CRLF)
        _write_part_content(out, part.value)
        out.write(CRLF)

    out.write(f"--{boundary}--".encode("ascii"))

    content = out.getvalue()
    logger.debug(
        "BB_MULTIPART_ENCODED parts=%s bytes=%s",
        [part.name for part in fields],
        len(content),
    )
    return content, boundary


def _write_part_content(out: io.BytesIO, value: Any) -> None:
    if isinstance(value, (bytes, bytearray, memoryview)):
        out.write(value)
    elif hasattr(value, "read"):
        # Caller owns the stream: read it through, never close it
        shutil.copyfileobj(value, out)
    elif value is not None:
        out.write(_scalar_text(value).encode("utf-8"))


def _scalar_text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _raw_bytes(body: Any) -> bytes:
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    return str(body).encode("utf-8")
