"""Thin HTTP client for the BlueBubbles server REST API.

Every resource call flows through `BlueBubblesClient.request`:
build URI -> encode body -> send -> decode envelope.

Failure modes:
- Non-2xx with a body: the server still sends its JSON envelope. The body is
  decoded as usual and the HTTPError is attached as `envelope.exception`.
- No response at all (refused, DNS, ...): the requests exception is re-raised
  unmodified.
- Body is not a valid envelope: pydantic.ValidationError is re-raised.

No retries and no timeout are configured here.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import requests
from pydantic import ValidationError

from bluebubbles.api.attachment import AttachmentApi
from bluebubbles.api.chat import ChatApi
from bluebubbles.api.contact import ContactApi
from bluebubbles.api.handle import HandleApi
from bluebubbles.api.message import MessageApi
from bluebubbles.api.server import GeneralApi, MacOSApi, ServerApi
from bluebubbles.client.encoding import DEFAULT_CONTENT_TYPE, EncodedBody, encode_body
from bluebubbles.client.query import build_uri
from bluebubbles.config.settings import BlueBubblesSettings
from bluebubbles.models.envelope import ApiResponse, envelope_type

logger = logging.getLogger(__name__)


class BlueBubblesClient:
    """Client for a BlueBubbles server.

    Attributes:
        session (requests.Session): Session used for every request.
        server_url (str): The server root, e.g. "http://192.168.1.20:1234".
        password (str): The server password, sent as the `password` query
            parameter on every request.
    """

    DEFAULT_CONTENT_TYPE = DEFAULT_CONTENT_TYPE

    def __init__(
        self,
        server_url: str,
        password: str,
        session: requests.Session | None = None,
    ):
        """Initializes the client.

        Args:
            server_url: The server URL to connect to.
            password: The password protecting the server.
            session: Optional pre-configured session (proxies, certificates).
        """

        if not server_url:
            raise ValueError("server_url is required")
        if password is None:
            raise ValueError("password is required")

        self.server_url = server_url
        self.password = password
        self.session = session or requests.Session()

        self.attachment = AttachmentApi(self)
        self.chat = ChatApi(self)
        self.contact = ContactApi(self)
        self.general = GeneralApi(self)
        self.handle = HandleApi(self)
        self.macos = MacOSApi(self)
        self.message = MessageApi(self)
        self.server = ServerApi(self)

        logger.info("BlueBubblesClient initialized with server_url=%s", self.server_url)

    @classmethod
    def from_settings(cls, settings: BlueBubblesSettings) -> BlueBubblesClient:
        return cls(settings.server_url, settings.password)

    def build_uri(self, path: str, query: str | None = None) -> str:
        """Returns the full request URI with the password as first parameter."""
        return build_uri(self.server_url, self.password, path, query)

    def request(
        self,
        method: str,
        path: str,
        query: str | None = None,
        body: Any = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        *,
        data_type: Any = Any,
        metadata_type: Any = Any,
    ) -> ApiResponse:
        """Sends a request and decodes the response envelope.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            path: Already formatted and escaped path.
            query: Extra query string, appended after the password.
            body: Request body, or None for no body.
            content_type: How to encode `body`.
            data_type: Expected type of the envelope's `data`.
            metadata_type: Expected type of the envelope's `metadata`.

        Returns:
            ApiResponse: The decoded envelope. Check `error` before using `data`.

        Raises:
            requests.exceptions.RequestException: If no response was received.
            pydantic.ValidationError: If the body is not a valid envelope.
        """

        uri = self.build_uri(path, query)
        encoded = encode_body(body, content_type)
        response, exception = self._send(method, uri, path, encoded)
        return self._decode(
            response, exception, envelope_type(data_type, metadata_type), method, path
        )

    async def request_async(
        self,
        method: str,
        path: str,
        query: str | None = None,
        body: Any = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        *,
        data_type: Any = Any,
        metadata_type: Any = Any,
    ) -> ApiResponse:
        """Runs `request` on a worker thread. Cannot be cancelled once started."""
        return await asyncio.to_thread(
            self.request,
            method,
            path,
            query,
            body,
            content_type,
            data_type=data_type,
            metadata_type=metadata_type,
        )

    def open(self, method: str, path: str, query: str | None = None) -> requests.Response:
        """Sends a request whose response is raw content rather than an envelope.

        Raises:
            requests.exceptions.RequestException: On connection failures and
                on any non-2xx status.
        """

        uri = self.build_uri(path, query)
        response, exception = self._send(method, uri, path, None)
        if exception is not None:
            raise exception
        return response

    async def open_async(
        self, method: str, path: str, query: str | None = None
    ) -> requests.Response:
        return await asyncio.to_thread(self.open, method, path, query)

    # --- verb helpers ---

    def get(self, path: str, query: str | None = None, **types: Any) -> ApiResponse:
        return self.request("GET", path, query, **types)

    def post(
        self,
        path: str,
        body: Any = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        **types: Any,
    ) -> ApiResponse:
        return self.request("POST", path, None, body, content_type, **types)

    def put(
        self,
        path: str,
        body: Any = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        **types: Any,
    ) -> ApiResponse:
        return self.request("PUT", path, None, body, content_type, **types)

    def delete(self, path: str, **types: Any) -> ApiResponse:
        return self.request("DELETE", path, **types)

    async def get_async(self, path: str, query: str | None = None, **types: Any) -> ApiResponse:
        return await self.request_async("GET", path, query, **types)

    async def post_async(
        self,
        path: str,
        body: Any = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        **types: Any,
    ) -> ApiResponse:
        return await self.request_async("POST", path, None, body, content_type, **types)

    async def put_async(
        self,
        path: str,
        body: Any = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
        **types: Any,
    ) -> ApiResponse:
        return await self.request_async("PUT", path, None, body, content_type, **types)

    async def delete_async(self, path: str, **types: Any) -> ApiResponse:
        return await self.request_async("DELETE", path, **types)

    # --- pipeline ---

    def _send(
        self,
        method: str,
        uri: str,
        path: str,
        encoded: EncodedBody | None,
    ) -> tuple[requests.Response, requests.exceptions.RequestException | None]:
        """Sends the request.

        Returns the response plus the HTTPError raised for a non-2xx status,
        if any. Only the path is logged; the URI carries the password.
        """

        headers = {"Content-Type": encoded.content_type} if encoded else {}
        data = encoded.content if encoded else None

        start_ts = time.perf_counter()

        try:
            logger.debug("BB_REQUEST_START method=%s path=%s", method, path)
            response = self.session.request(method, uri, data=data, headers=headers)
            response.raise_for_status()

        except requests.exceptions.RequestException as e:
            duration = (time.perf_counter() - start_ts) * 1000

            if e.response is None:
                logger.error(
                    "BB_REQUEST_FAILED method=%s path=%s latency_ms=%.2f error=%s",
                    method,
                    path,
                    duration,
                    type(e).__name__,
                )
                raise

            logger.warning(
                "BB_REQUEST_ERROR_STATUS method=%s path=%s status=%s latency_ms=%.2f",
                method,
                path,
                e.response.status_code,
                duration,
            )
            return e.response, e

        duration = (time.perf_counter() - start_ts) * 1000
        logger.info(
            "BB_REQUEST_SUCCESS method=%s path=%s status=%s latency_ms=%.2f",
            method,
            path,
            response.status_code,
            duration,
        )
        return response, None

    def _decode(
        self,
        response: requests.Response,
        exception: requests.exceptions.RequestException | None,
        model: type[ApiResponse],
        method: str,
        path: str,
    ) -> ApiResponse:
        text = response.text

        try:
            return model.from_text(text, exception)

        except ValidationError as e:
            logger.error(
                "BB_RESPONSE_DECODE_FAILED method=%s path=%s status=%s body_chars=%s errors=%s",
                method,
                path,
                response.status_code,
                len(text),
                e.error_count(),
            )
            raise
