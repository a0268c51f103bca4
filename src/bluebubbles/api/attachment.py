"""Attachment endpoints (/api/v1/attachment)."""

from __future__ import annotations

import asyncio

from bluebubbles.api.base import ResourceApi
from bluebubbles.client.query import build_query, format_path
from bluebubbles.models.entities import AttachmentEntity, CountResponse
from bluebubbles.models.envelope import ApiResponse


class AttachmentApi(ResourceApi):
    COUNT_PATH = "/api/v1/attachment/count"
    DOWNLOAD_PATH = "/api/v1/attachment/{0}/download"
    BLURHASH_PATH = "/api/v1/attachment/{0}/blurhash"
    FIND_PATH = "/api/v1/attachment/{0}"

    def count(self) -> ApiResponse:
        return self._client.get(self.COUNT_PATH, data_type=CountResponse)

    def download(
        self,
        guid: str,
        width: int | None = None,
        height: int | None = None,
        quality: str | None = None,
        original: bool = False,
    ) -> bytes:
        """Downloads an attachment's content.

        Args:
            guid: The attachment GUID.
            width: Resize images to this width.
            height: Resize images to this height.
            quality: Image quality ("good", "better", "best").
            original: Download the original file instead of the converted
                one (HEIC, CAF).

        Returns:
            bytes: The file content.

        Raises:
            requests.exceptions.RequestException: On any failed download,
                including non-2xx statuses.
        """

        query = build_query(
            {"width": width, "height": height, "quality": quality, "original": original}
        )
        response = self._client.open("GET", format_path(self.DOWNLOAD_PATH, guid), query)
        return response.content

    def blurhash(
        self,
        guid: str,
        width: int | None = None,
        height: int | None = None,
        quality: str | None = None,
    ) -> ApiResponse:
        query = build_query({"width": width, "height": height, "quality": quality})
        return self._client.get(
            format_path(self.BLURHASH_PATH, guid), query, data_type=str
        )

    def find(self, guid: str) -> ApiResponse:
        return self._client.get(
            format_path(self.FIND_PATH, guid), data_type=AttachmentEntity
        )

    async def count_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.count)

    async def download_async(
        self,
        guid: str,
        width: int | None = None,
        height: int | None = None,
        quality: str | None = None,
        original: bool = False,
    ) -> bytes:
        return await asyncio.to_thread(
            self.download, guid, width, height, quality, original
        )

    async def blurhash_async(
        self,
        guid: str,
        width: int | None = None,
        height: int | None = None,
        quality: str | None = None,
    ) -> ApiResponse:
        return await asyncio.to_thread(self.blurhash, guid, width, height, quality)

    async def find_async(self, guid: str) -> ApiResponse:
        return await asyncio.to_thread(self.find, guid)
