"""
Server info, alert and statistics payloads.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ServerInfoResponse(BaseModel):
    # The info endpoint is the one place the server uses snake_case keys.
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    os_version: str | None = None
    server_version: str | None = None
    private_api_enabled: bool = Field(default=False, alias="private_api")
    proxy_service: str | None = None
    helper_connected: bool = False
    detected_icloud: str | None = None


class ServerAlertType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warn"


class ServerAlert(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    type: ServerAlertType
    value: str | None = None
    is_read: bool = Field(default=False, alias="isRead")
    created: datetime | None = None
    updated: datetime | None = None


class ServerStatTotalsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    handles: int = 0
    messages: int = 0
    chats: int = 0
    attachments: int = 0

    @property
    def total(self) -> int:
        return self.handles + self.messages + self.chats + self.attachments


class ServerStatMediaTotals(BaseModel):
    model_config = ConfigDict(extra="ignore")

    images: int = 0
    videos: int = 0
    locations: int = 0

    @property
    def total(self) -> int:
        return self.images + self.videos + self.locations


class ServerStatMediaByChatTotals(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    chat_guid: str | None = Field(default=None, alias="chatGuid")
    group_name: str | None = Field(default=None, alias="groupName")
    totals: ServerStatMediaTotals | None = None
