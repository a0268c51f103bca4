"""Contact endpoints (/api/v1/contact)."""

from __future__ import annotations

import asyncio

from bluebubbles.api.base import ResourceApi
from bluebubbles.models.entities import ContactObject
from bluebubbles.models.envelope import ApiResponse
from bluebubbles.models.requests import ContactCreateRequest, ContactQueryRequest


class ContactApi(ResourceApi):
    CONTACTS_PATH = "/api/v1/contact"  # get, create
    QUERY_PATH = "/api/v1/contact/query"

    def get(self) -> ApiResponse:
        return self._client.get(self.CONTACTS_PATH, data_type=list[ContactObject])

    def create(self, request: ContactCreateRequest) -> ApiResponse:
        return self._client.post(
            self.CONTACTS_PATH, request, data_type=list[ContactObject]
        )

    def query(self, request: ContactQueryRequest) -> ApiResponse:
        """Looks up contact cards by phone number or email address."""
        return self._client.post(self.QUERY_PATH, request, data_type=list[ContactObject])

    async def get_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.get)

    async def create_async(self, request: ContactCreateRequest) -> ApiResponse:
        return await asyncio.to_thread(self.create, request)

    async def query_async(self, request: ContactQueryRequest) -> ApiResponse:
        return await asyncio.to_thread(self.query, request)
