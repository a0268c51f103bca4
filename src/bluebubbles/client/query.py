"""Path and query-string building for BlueBubbles requests.

Every request URI has the shape

    <server>/<path>?password=<secret>[&<query>]

Path arguments are escaped as single path segments and substituted into a
template with positional placeholders ("/api/v1/chat/{0}"). Query strings are
built from an ordered mapping; parameter names are emitted as-is.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any
from urllib.parse import quote, urlsplit, urlunsplit


def escape(value: str) -> str:
    """Percent-encodes everything outside the RFC 3986 unreserved set."""
    return quote(value, safe="")


def format_path(template: str, *args: str) -> str:
    """Substitutes escaped arguments into a positional path template.

    Args:
        template: Path with "{0}", "{1}", ... placeholders.
        *args: Raw values, each escaped as one path segment.

    Returns:
        str: The formatted path.

    Raises:
        ValueError: If any argument is None.
    """

    for index, arg in enumerate(args):
        if arg is None:
            raise ValueError(f"Argument from index {index} cannot be None.")

    return template.format(*(escape(str(arg)) for arg in args))


def _format_value(value: Any) -> str:
    # bool first: it is also an int
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (list, tuple)):
        return ",".join(_format_value(v) for v in value)
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def build_query(params: Mapping[str, Any] | Iterable[tuple[str, Any]] | None) -> str:
    """Builds "key=value&key2=value2" from optional parameters.

    Entries whose value is None are skipped. Booleans become 1/0 and
    list values are joined with commas. Values are percent-encoded,
    names are not.
    """

    if not params:
        return ""

    items = params.items() if isinstance(params, Mapping) else params

    return "&".join(
        f"{name}={escape(_format_value(value))}"
        for name, value in items
        if value is not None
    )


def build_uri(server_url: str, password: str, path: str, query: str | None = None) -> str:
    """Joins the server address, an already formatted path and the query.

    The password always goes first; `query` is appended after it.
    Any path on `server_url` is replaced by `path`.
    """

    full_query = f"password={escape(password)}"
    if query:
        full_query += f"&{query}"

    parts = urlsplit(server_url)
    return urlunsplit((parts.scheme, parts.netloc, path, full_query, ""))
