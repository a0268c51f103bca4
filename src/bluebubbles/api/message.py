"""Message endpoints (/api/v1/message)."""

from __future__ import annotations

import asyncio

from bluebubbles.api.base import ResourceApi, private_api
from bluebubbles.client.encoding import MULTIPART_FORM_DATA
from bluebubbles.client.query import build_query, format_path
from bluebubbles.models.entities import CountResponse, MessageEntity
from bluebubbles.models.envelope import ApiResponse, QueryMetadata
from bluebubbles.models.requests import (
    MessageAttachmentRequest,
    MessageQueryRequest,
    MessageReactRequest,
    MessageTextRequest,
)


class MessageApi(ResourceApi):
    TEXT_PATH = "/api/v1/message/text"
    ATTACHMENT_PATH = "/api/v1/message/attachment"
    REACT_PATH = "/api/v1/message/react"
    COUNT_PATH = "/api/v1/message/count"
    UPDATED_COUNT_PATH = "/api/v1/message/count/updated"
    SENT_COUNT_PATH = "/api/v1/message/count/me"
    QUERY_PATH = "/api/v1/message/query"
    FIND_PATH = "/api/v1/message/{0}"

    def send_text(self, request: MessageTextRequest) -> ApiResponse:
        return self._client.post(self.TEXT_PATH, request, data_type=MessageEntity)

    def send_attachment(self, request: MessageAttachmentRequest) -> ApiResponse:
        """Uploads a file into a chat as multipart/form-data."""
        return self._client.post(
            self.ATTACHMENT_PATH,
            request,
            MULTIPART_FORM_DATA,
            data_type=MessageEntity,
        )

    @private_api
    def react(self, request: MessageReactRequest) -> ApiResponse:
        return self._client.post(self.REACT_PATH, request, data_type=MessageEntity)

    def count(self, after: int | None = None, before: int | None = None) -> ApiResponse:
        return self._client.get(
            self.COUNT_PATH,
            build_query({"before": before, "after": after}),
            data_type=CountResponse,
        )

    def updated_count(self, after: int, before: int | None = None) -> ApiResponse:
        """Counts messages updated (read, delivered, ...) after `after`."""
        return self._client.get(
            self.UPDATED_COUNT_PATH,
            build_query({"before": before, "after": after}),
            data_type=CountResponse,
        )

    def sent_count(self) -> ApiResponse:
        return self._client.get(self.SENT_COUNT_PATH, data_type=CountResponse)

    def query(self, request: MessageQueryRequest) -> ApiResponse:
        return self._client.post(
            self.QUERY_PATH,
            request,
            data_type=list[MessageEntity],
            metadata_type=QueryMetadata,
        )

    def find(self, guid: str, with_: list[str] | tuple[str, ...] = ()) -> ApiResponse:
        return self._client.get(
            format_path(self.FIND_PATH, guid),
            build_query({"with": list(with_)}),
            data_type=MessageEntity,
        )

    # --- async twins ---

    async def send_text_async(self, request: MessageTextRequest) -> ApiResponse:
        return await asyncio.to_thread(self.send_text, request)

    async def send_attachment_async(
        self, request: MessageAttachmentRequest
    ) -> ApiResponse:
        return await asyncio.to_thread(self.send_attachment, request)

    @private_api
    async def react_async(self, request: MessageReactRequest) -> ApiResponse:
        return await asyncio.to_thread(self.react, request)

    async def count_async(
        self, after: int | None = None, before: int | None = None
    ) -> ApiResponse:
        return await asyncio.to_thread(self.count, after, before)

    async def updated_count_async(
        self, after: int, before: int | None = None
    ) -> ApiResponse:
        return await asyncio.to_thread(self.updated_count, after, before)

    async def sent_count_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.sent_count)

    async def query_async(self, request: MessageQueryRequest) -> ApiResponse:
        return await asyncio.to_thread(self.query, request)

    async def find_async(
        self, guid: str, with_: list[str] | tuple[str, ...] = ()
    ) -> ApiResponse:
        return await asyncio.to_thread(self.find, guid, with_)
