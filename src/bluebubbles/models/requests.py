"""
Request bodies sent to the BlueBubbles server.

JSON bodies are pydantic models with one explicit wire name per field; the
declared field order is the serialized order. The attachment upload is the
only multipart body and lists its parts explicitly in `multipart_fields()`.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, BinaryIO

from pydantic import BaseModel, ConfigDict, Field

from bluebubbles.client.encoding import MultipartField


def _temp_guid() -> str:
    """Client-side id the server uses to drop duplicate sends."""
    return f"temp-{time.time_ns()}"


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class MessageTextMethod(str, Enum):
    APPLE_SCRIPT = "apple-script"
    PRIVATE_API = "private-api"


class ChatServiceType(str, Enum):
    IMESSAGE = "iMessage"
    SMS = "SMS"


class MessageReaction(str, Enum):
    ADD_LOVE = "love"
    ADD_LIKE = "like"
    ADD_DISLIKE = "dislike"
    ADD_LAUGH = "laugh"
    ADD_EMPHASIZE = "emphasize"
    ADD_QUESTION = "question"
    REMOVE_LOVE = "-love"
    REMOVE_LIKE = "-like"
    REMOVE_DISLIKE = "-dislike"
    REMOVE_LAUGH = "-laugh"
    REMOVE_EMPHASIZE = "-emphasize"
    REMOVE_QUESTION = "-question"


class MessageQuerySort(str, Enum):
    ASCENDING = "ASC"
    DESCENDING = "DESC"


class QueryRequest(RequestModel):
    """
    Shared paging fields of the database query endpoints.
    """

    limit: int | None = None
    offset: int | None = None
    with_: list[str] = Field(default_factory=list, alias="with")


# --- chat ---


class ChatCreateRequest(RequestModel):
    """Body for POST /api/v1/chat/new."""

    addresses: list[str]
    message: str
    method: MessageTextMethod = MessageTextMethod.APPLE_SCRIPT
    service: ChatServiceType = ChatServiceType.IMESSAGE
    temp_guid: str = Field(default_factory=_temp_guid, alias="tempGuid")


class ChatQueryRequest(QueryRequest):
    sort: str | None = None


class ChatUpdateRequest(RequestModel):
    display_name: str = Field(alias="displayName")


class ChatParticipantRequest(RequestModel):
    address: str


# --- handle ---


class HandleQueryRequest(QueryRequest):
    offset: int | None = 0
    address: str = ""


# --- message ---


class MessageTextRequest(RequestModel):
    """Body for POST /api/v1/message/text."""

    chat_guid: str = Field(alias="chatGuid")
    temp_guid: str = Field(default_factory=_temp_guid, alias="tempGuid")
    message: str
    method: MessageTextMethod = MessageTextMethod.APPLE_SCRIPT
    subject: str | None = None
    effect_id: str | None = Field(default=None, alias="effectId")
    selected_message_guid: str | None = Field(
        default=None, alias="selectedMessageGuid"
    )


class MessageReactRequest(RequestModel):
    chat_guid: str = Field(alias="chatGuid")
    selected_message_guid: str = Field(alias="selectedMessageGuid")
    reaction: MessageReaction


class MessageQueryRequest(QueryRequest):
    """
    Body for POST /api/v1/message/query.

    `where` takes the server's raw statement list, e.g.
    [{"statement": "message.text LIKE :text", "args": {"text": "%hi%"}}].
    """

    where: list[dict[str, Any]] | None = None
    after: int | None = None
    before: int | None = None
    sort: MessageQuerySort = MessageQuerySort.DESCENDING


@dataclass
class MessageAttachmentRequest:
    """
    Body for POST /api/v1/message/attachment (multipart/form-data).

    `attachment` is either raw bytes or a readable binary stream. A stream is
    read once during encoding and is left open; closing it is up to the caller.
    """

    chat_guid: str
    name: str
    attachment: bytes | BinaryIO
    temp_guid: str = field(default_factory=_temp_guid)

    def __post_init__(self) -> None:
        for attr in ("chat_guid", "name", "attachment"):
            if getattr(self, attr) is None:
                raise ValueError(f"{attr} is required")

    def multipart_fields(self) -> list[MultipartField]:
        return [
            MultipartField("chatGuid", self.chat_guid),
            MultipartField("tempGuid", self.temp_guid),
            MultipartField("name", self.name),
            MultipartField("attachment", self.attachment, filename=self.name),
        ]


# --- contact ---


class ContactCreateRequest(RequestModel):
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    display_name: str = Field(default="", alias="displayName")
    phone_numbers: list[str] = Field(default_factory=list, alias="phoneNumbers")
    emails: list[str] = Field(default_factory=list)


class ContactQueryRequest(RequestModel):
    addresses: list[str] = Field(default_factory=list)


# --- server ---


class ServerMarkAlertsAsReadRequest(RequestModel):
    ids: list[int] = Field(default_factory=list)
