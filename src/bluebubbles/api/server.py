"""Server management endpoints (/api/v1/server, /api/v1/ping, /api/v1/mac)."""

from __future__ import annotations

import asyncio

from bluebubbles.api.base import ResourceApi
from bluebubbles.models.envelope import ApiResponse
from bluebubbles.models.requests import ServerMarkAlertsAsReadRequest
from bluebubbles.models.server import (
    ServerAlert,
    ServerInfoResponse,
    ServerStatMediaByChatTotals,
    ServerStatMediaTotals,
    ServerStatTotalsResponse,
)


class GeneralApi(ResourceApi):
    PING_PATH = "/api/v1/ping"

    def ping(self) -> ApiResponse:
        """Checks the server is reachable and the password is accepted."""
        return self._client.get(self.PING_PATH, data_type=str)

    async def ping_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.ping)


class MacOSApi(ResourceApi):
    LOCK_PATH = "/api/v1/mac/lock"
    RESTART_MESSAGES_APP_PATH = "/api/v1/mac/imessage/restart"

    def lock(self) -> ApiResponse:
        """Locks the macOS host's screen."""
        return self._client.post(self.LOCK_PATH)

    def restart_messages_app(self) -> ApiResponse:
        return self._client.post(self.RESTART_MESSAGES_APP_PATH)

    async def lock_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.lock)

    async def restart_messages_app_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.restart_messages_app)


class ServerApi(ResourceApi):
    INFO_PATH = "/api/v1/server/info"
    LOGS_PATH = "/api/v1/server/logs"
    RESTART_SERVICES_PATH = "/api/v1/server/restart/soft"
    RESTART_ALL_PATH = "/api/v1/server/restart/hard"
    ALERTS_PATH = "/api/v1/server/alert"
    MARK_ALERTS_READ_PATH = "/api/v1/server/alert/read"
    STAT_TOTALS_PATH = "/api/v1/server/statistics/totals"
    STAT_MEDIA_PATH = "/api/v1/server/statistics/media"
    STAT_MEDIA_BY_CHAT_PATH = "/api/v1/server/statistics/media/chat"

    def get_info(self) -> ApiResponse:
        return self._client.get(self.INFO_PATH, data_type=ServerInfoResponse)

    def get_logs(self) -> ApiResponse:
        return self._client.get(self.LOGS_PATH, data_type=str)

    def restart_services(self) -> ApiResponse:
        """Soft restart: restarts the server's services, not the app."""
        return self._client.get(self.RESTART_SERVICES_PATH)

    def restart_all(self) -> ApiResponse:
        """Hard restart: relaunches the whole server app."""
        return self._client.get(self.RESTART_ALL_PATH)

    def get_alerts(self) -> ApiResponse:
        return self._client.get(self.ALERTS_PATH, data_type=list[ServerAlert])

    def mark_alerts_as_read(self, request: ServerMarkAlertsAsReadRequest) -> ApiResponse:
        return self._client.post(self.MARK_ALERTS_READ_PATH, request)

    def get_stat_totals(self) -> ApiResponse:
        return self._client.get(self.STAT_TOTALS_PATH, data_type=ServerStatTotalsResponse)

    def get_stat_media(self) -> ApiResponse:
        return self._client.get(self.STAT_MEDIA_PATH, data_type=ServerStatMediaTotals)

    def get_stat_media_by_chat(self) -> ApiResponse:
        return self._client.get(
            self.STAT_MEDIA_BY_CHAT_PATH, data_type=list[ServerStatMediaByChatTotals]
        )

    async def get_info_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.get_info)

    async def get_logs_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.get_logs)

    async def restart_services_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.restart_services)

    async def restart_all_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.restart_all)

    async def get_alerts_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.get_alerts)

    async def mark_alerts_as_read_async(
        self, request: ServerMarkAlertsAsReadRequest
    ) -> ApiResponse:
        return await asyncio.to_thread(self.mark_alerts_as_read, request)

    async def get_stat_totals_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.get_stat_totals)

    async def get_stat_media_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.get_stat_media)

    async def get_stat_media_by_chat_async(self) -> ApiResponse:
        return await asyncio.to_thread(self.get_stat_media_by_chat)
