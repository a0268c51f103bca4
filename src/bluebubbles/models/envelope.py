"""
Response envelope returned by every BlueBubbles endpoint.

Wire shape:
    {status, message, data, metadata?, error?}

Design notes:
- One generic model covers plain, data-only and data+metadata responses.
  The payload shapes are chosen by the caller, never sniffed from the JSON.
- `exception` and `raw_text` are local diagnostics. They live in private
  attributes, so they are neither read from nor written to the wire.
- Envelopes are frozen. The decoder attaches the diagnostics once, right
  after validation, before the envelope is handed to the caller.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

DataT = TypeVar("DataT")
MetaT = TypeVar("MetaT")


class ApiError(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str | None = None
    message: str | None = None


class QueryMetadata(BaseModel):
    """
    Pagination info attached to list/query responses.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    limit: int = Field(default=0, ge=0)
    offset: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class ApiResponse(BaseModel, Generic[DataT, MetaT]):
    """
    Uniform response wrapper.

    When `error` is set the call failed, whatever `data` holds.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: int
    message: str = ""
    data: DataT | None = None
    metadata: MetaT | None = None
    error: ApiError | None = None

    _exception: BaseException | None = PrivateAttr(default=None)
    _raw_text: str | None = PrivateAttr(default=None)

    @classmethod
    def from_text(cls, text: str, exception: BaseException | None = None) -> ApiResponse:
        """Decodes a response body and attaches the local diagnostics.

        Raises:
            pydantic.ValidationError: If `text` is not valid JSON or does not
                fit the expected payload types.
        """
        envelope = cls.model_validate_json(text)
        envelope._exception = exception
        envelope._raw_text = text
        return envelope

    @property
    def exception(self) -> BaseException | None:
        """Transport exception raised for a non-2xx status, if any."""
        return self._exception

    @property
    def raw_text(self) -> str | None:
        """The exact response body this envelope was decoded from."""
        return self._raw_text

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def __eq__(self, other: object) -> bool:
        # Each call raises its own HTTPError, so exceptions match by type and args.
        if not isinstance(other, ApiResponse):
            return NotImplemented
        return (
            _origin(self) is _origin(other)
            and self.__dict__ == other.__dict__
            and self._raw_text == other._raw_text
            and _exception_key(self._exception) == _exception_key(other._exception)
        )


def _origin(envelope: ApiResponse) -> type:
    return envelope.__pydantic_generic_metadata__["origin"] or type(envelope)


def _exception_key(exception: BaseException | None) -> tuple | None:
    if exception is None:
        return None
    return type(exception), exception.args


def envelope_type(data_type: Any = Any, metadata_type: Any = Any) -> type[ApiResponse]:
    """Returns the envelope model parameterized on the expected payload shapes."""
    return ApiResponse[data_type, metadata_type]
