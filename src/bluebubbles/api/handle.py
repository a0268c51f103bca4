"""Handle endpoints (/api/v1/handle)."""

from __future__ import annotations

import asyncio

from bluebubbles.api.base import ResourceApi
from bluebubbles.client.query import format_path
from bluebubbles.models.entities import CountResponse, HandleEntity
from bluebubbles.models.envelope import ApiResponse, QueryMetadata
from bluebubbles.models.requests import HandleQueryRequest


class HandleApi(ResourceApi):
    COUNT_PATH = "/api/v1/handle/count"
    QUERY_PATH = "/api/v1/handle/query"
    FIND_PATH = "/api/v1/handle/{0}"

    def count(self) -> ApiResponse:
        return self._client.get(self.COUNT_PATH, data_type=CountResponse)

    def query(self, request: HandleQueryRequest) -> ApiResponse:
        return self._client.post(
            self.QUERY_PATH,
            request,
            data_type=list[HandleEntity],
            metadata_type=QueryMetadata,
        )

    def find(self, guid: str) -> ApiResponse:
        return self._client.get(format_path(self.FIND_PATH, guid), data_type=HandleEntity)

    async def count_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.count)

    async def query_async(self, request: HandleQueryRequest) -> ApiResponse:
        return await asyncio.to_thread(self.query, request)

    async def find_async(self, guid: str) -> ApiResponse:
        return await asyncio.to_thread(self.find, guid)
