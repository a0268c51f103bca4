"""Chat endpoints (/api/v1/chat)."""

from __future__ import annotations

import asyncio

from bluebubbles.api.base import ResourceApi, private_api
from bluebubbles.client.query import build_query, format_path
from bluebubbles.models.entities import ChatCountResponse, ChatEntity, MessageEntity
from bluebubbles.models.envelope import ApiResponse, QueryMetadata
from bluebubbles.models.requests import (
    ChatCreateRequest,
    ChatParticipantRequest,
    ChatQueryRequest,
    ChatUpdateRequest,
)


class ChatApi(ResourceApi):
    CREATE_PATH = "/api/v1/chat/new"
    COUNT_PATH = "/api/v1/chat/count"
    QUERY_PATH = "/api/v1/chat/query"
    MESSAGES_PATH = "/api/v1/chat/{0}/message"
    MARK_READ_PATH = "/api/v1/chat/{0}/read"
    ADD_PARTICIPANT_PATH = "/api/v1/chat/{0}/participant/add"
    REMOVE_PARTICIPANT_PATH = "/api/v1/chat/{0}/participant/remove"
    GROUP_ICON_PATH = "/api/v1/chat/{0}/icon"
    CHAT_PATH = "/api/v1/chat/{0}"  # update, find, delete

    def create(self, request: ChatCreateRequest) -> ApiResponse:
        """Creates a new chat and sends its first message."""
        return self._client.post(self.CREATE_PATH, request, data_type=ChatEntity)

    def count(self) -> ApiResponse:
        return self._client.get(self.COUNT_PATH, data_type=ChatCountResponse)

    def query(self, request: ChatQueryRequest) -> ApiResponse:
        return self._client.post(
            self.QUERY_PATH,
            request,
            data_type=list[ChatEntity],
            metadata_type=QueryMetadata,
        )

    def get_messages(
        self,
        guid: str,
        before: int | None = None,
        after: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
        sort: str | None = None,
        with_: list[str] | tuple[str, ...] = (),
    ) -> ApiResponse:
        """Fetches the messages of one chat.

        Args:
            guid: The chat GUID.
            before: Only messages before this epoch time.
            after: Only messages after this epoch time.
            limit: Database query limit.
            offset: Database query offset.
            sort: Sort order ("ASC" / "DESC").
            with_: Relations to expand, e.g. ["attachment", "handle"].
        """

        query = build_query(
            {
                "with": list(with_),
                "before": before,
                "after": after,
                "limit": limit,
                "offset": offset,
                "sort": sort,
            }
        )
        return self._client.get(
            format_path(self.MESSAGES_PATH, guid),
            query,
            data_type=list[MessageEntity],
        )

    @private_api
    def mark_read(self, guid: str) -> ApiResponse:
        return self._client.post(format_path(self.MARK_READ_PATH, guid))

    @private_api
    def add_participant(self, guid: str, request: ChatParticipantRequest) -> ApiResponse:
        return self._client.post(
            format_path(self.ADD_PARTICIPANT_PATH, guid), request, data_type=ChatEntity
        )

    @private_api
    def remove_participant(
        self, guid: str, request: ChatParticipantRequest
    ) -> ApiResponse:
        return self._client.post(
            format_path(self.REMOVE_PARTICIPANT_PATH, guid),
            request,
            data_type=ChatEntity,
        )

    def get_group_icon(self, guid: str) -> bytes:
        """
        Downloads a group chat's icon. Only set when the group changed its
        icon after the server's Messages database was created.
        """
        return self._client.open("GET", format_path(self.GROUP_ICON_PATH, guid)).content

    @private_api
    def update(self, guid: str, request: ChatUpdateRequest) -> ApiResponse:
        return self._client.put(
            format_path(self.CHAT_PATH, guid), request, data_type=ChatEntity
        )

    def find(self, guid: str, with_: list[str] | tuple[str, ...] = ()) -> ApiResponse:
        return self._client.get(
            format_path(self.CHAT_PATH, guid),
            build_query({"with": list(with_)}),
            data_type=ChatEntity,
        )

    @private_api
    def delete(self, guid: str) -> ApiResponse:
        return self._client.delete(format_path(self.CHAT_PATH, guid))

    # --- async twins ---

    async def create_async(self, request: ChatCreateRequest) -> ApiResponse:
        return await asyncio.to_thread(self.create, request)

    async def count_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.count)

    async def query_async(self, request: ChatQueryRequest) -> ApiResponse:
        return await asyncio.to_thread(self.query, request)

    async def get_messages_async(
        self,
        guid: str,
        before: int | None = None,
        after: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
        sort: str | None = None,
        with_: list[str] | tuple[str, ...] = (),
    ) -> ApiResponse:
        return await asyncio.to_thread(
            self.get_messages, guid, before, after, limit, offset, sort, with_
        )

    @private_api
    async def mark_read_async(self, guid: str) -> ApiResponse:
        return await asyncio.to_thread(self.mark_read, guid)

    @private_api
    async def add_participant_async(
        self, guid: str, request: ChatParticipantRequest
    ) -> ApiResponse:
        return await asyncio.to_thread(self.add_participant, guid, request)

    @private_api
    async def remove_participant_async(
        self, guid: str, request: ChatParticipantRequest
    ) -> ApiResponse:
        return await asyncio.to_thread(self.remove_participant, guid, request)

    async def get_group_icon_async(self, guid: str) -> bytes:
        return await asyncio.to_thread(self.get_group_icon, guid)

    @private_api
    async def update_async(self, guid: str, request: ChatUpdateRequest) -> ApiResponse:
        return await asyncio.to_thread(self.update, guid, request)

    async def find_async(
        self, guid: str, with_: list[str] | tuple[str, ...] = ()
    ) -> ApiResponse:
        return await asyncio.to_thread(self.find, guid, with_)

    @private_api
    async def delete_async(self, guid: str) -> ApiResponse:
        return await asyncio.to_thread(self.delete, guid)
