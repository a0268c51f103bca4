"""
Database entities returned by the BlueBubbles server.

These models mirror rows from the macOS Messages database as the server
serializes them (chat, message, handle, attachment) plus the contact card
shape.

Design notes:
- Wire names are declared per field (`alias=`), no alias generator.
- Every field is optional. Which relations are populated depends on the
  `with` expansions of the call, so validation stays permissive.
- Chats, messages, handles and attachments reference each other, hence the
  single module and the `model_rebuild()` calls at the bottom.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BaseEntity(BaseModel):
    """
    Common base for database-backed entities.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    original_row_id: int | None = Field(default=None, alias="originalROWID")


class HandleEntity(BaseEntity):
    messages: list[MessageEntity] | None = None
    chats: list[ChatEntity] | None = None
    address: str | None = None
    country: str | None = None
    uncanonicalized_id: str | None = Field(default=None, alias="uncanonicalizedId")


class AttachmentEntity(BaseEntity):
    guid: str | None = None
    messages: list[MessageEntity] | None = None
    data: str | None = None
    blurhash: str | None = None
    width: int | None = None
    height: int | None = None
    uti: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")
    transfer_state: int | None = Field(default=None, alias="transferState")
    is_outgoing: bool | None = Field(default=None, alias="isOutgoing")
    transfer_name: str | None = Field(default=None, alias="transferName")
    total_bytes: int | None = Field(default=None, alias="totalBytes")
    is_sticker: bool | None = Field(default=None, alias="isSticker")
    hide_attachment: bool | None = Field(default=None, alias="hideAttachment")
    original_guid: str | None = Field(default=None, alias="originalGuid")
    metadata: dict[str, Any] | None = None


class AttributedRun(BaseModel):
    model_config = ConfigDict(extra="ignore")

    range: list[int] = Field(default_factory=list)
    attributes: dict[str, Any] | None = None


class AttributedData(BaseModel):
    """
    One attributed-string segment of a message body (mentions, links, ...).
    """

    model_config = ConfigDict(extra="ignore")

    string: str | None = None
    runs: list[AttributedRun] = Field(default_factory=list)


class MessageEntity(BaseEntity):
    temp_guid: str | None = Field(default=None, alias="tempGuid")
    guid: str | None = None
    text: str | None = None
    attributed_body: list[AttributedData] | None = Field(
        default=None, alias="attributedBody"
    )
    handle: HandleEntity | None = None
    handle_id: int | None = Field(default=None, alias="handleId")
    other_handle: int | None = Field(default=None, alias="otherHandle")
    chats: list[ChatEntity] | None = None
    attachments: list[AttachmentEntity] | None = None
    subject: str | None = None
    country: str | None = None
    error: int | None = None

    # Epoch milliseconds, as the server reports them
    date_created: int | None = Field(default=None, alias="dateCreated")
    date_read: int | None = Field(default=None, alias="dateRead")
    date_delivered: int | None = Field(default=None, alias="dateDelivered")
    date_played: int | None = Field(default=None, alias="datePlayed")

    is_from_me: bool | None = Field(default=None, alias="isFromMe")
    is_delayed: bool | None = Field(default=None, alias="isDelayed")
    is_auto_reply: bool | None = Field(default=None, alias="isAutoReply")
    is_system_message: bool | None = Field(default=None, alias="isSystemMessage")
    is_service_message: bool | None = Field(default=None, alias="isServiceMessage")
    is_forward: bool | None = Field(default=None, alias="isForward")
    is_archived: bool | None = Field(default=None, alias="isArchived")
    cache_roomnames: str | None = Field(default=None, alias="cacheRoomnames")
    is_audio_message: bool | None = Field(default=None, alias="isAudioMessage")
    has_dd_results: bool | None = Field(default=None, alias="hasDdResults")
    item_type: int | None = Field(default=None, alias="itemType")
    group_title: str | None = Field(default=None, alias="groupTitle")
    group_action_type: int | None = Field(default=None, alias="groupActionType")
    is_expired: bool | None = Field(default=None, alias="isExpired")
    balloon_bundle_id: str | None = Field(default=None, alias="balloonBundleId")
    associated_message_guid: str | None = Field(
        default=None, alias="associatedMessageGuid"
    )
    associated_message_type: str | None = Field(
        default=None, alias="associatedMessageType"
    )
    expressive_send_style_id: str | None = Field(
        default=None, alias="expressiveSendStyleId"
    )
    time_expressive_send_style_id: int | None = Field(
        default=None, alias="timeExpressiveSendStyleId"
    )
    reply_to_guid: str | None = Field(default=None, alias="replyToGuid")
    is_corrupt: bool | None = Field(default=None, alias="isCorrupt")
    is_spam: bool | None = Field(default=None, alias="isSpam")
    thread_originator_guid: str | None = Field(
        default=None, alias="threadOriginatorGuid"
    )
    thread_originator_part: str | None = Field(
        default=None, alias="threadOriginatorPart"
    )


class ChatEntity(BaseEntity):
    guid: str | None = None
    participants: list[HandleEntity] | None = None
    messages: list[MessageEntity] | None = None
    last_message: MessageEntity | None = Field(default=None, alias="lastMessage")
    style: int | None = None
    chat_identifier: str | None = Field(default=None, alias="chatIdentifier")
    is_archived: bool | None = Field(default=None, alias="isArchived")
    is_filtered: bool | None = Field(default=None, alias="isFiltered")
    display_name: str | None = Field(default=None, alias="displayName")
    group_id: str | None = Field(default=None, alias="groupId")


class ContactAddress(BaseModel):
    model_config = ConfigDict(extra="ignore")

    address: str | None = None
    id: str | None = None


class ContactObject(BaseModel):
    """
    A contact card, either from the macOS address book or stored by the server.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    phone_numbers: list[ContactAddress] = Field(
        default_factory=list, alias="phoneNumbers"
    )
    emails: list[ContactAddress] = Field(default_factory=list)
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    display_name: str | None = Field(default=None, alias="displayName")
    birthday: str | None = None
    source_type: str | None = Field(default=None, alias="sourceType")
    id: str | None = None


class CountResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total: int = 0


class ChatCountBreakdown(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    imessage: int = Field(default=0, alias="iMessage")
    sms: int = Field(default=0, alias="SMS")


class ChatCountResponse(CountResponse):
    breakdown: ChatCountBreakdown | None = None


HandleEntity.model_rebuild()
AttachmentEntity.model_rebuild()
MessageEntity.model_rebuild()
ChatEntity.model_rebuild()
