from __future__ import annotations

from typing import TYPE_CHECKING, Callable, TypeVar

if TYPE_CHECKING:
    from bluebubbles.client.client import BlueBubblesClient

F = TypeVar("F", bound=Callable)


def private_api(func: F) -> F:
    """
    Marks an operation that only works with the server's Private API enabled.

    The marker is informational; the server answers with an error envelope
    when the helper is not connected.
    """
    func.private_api = True
    return func


class ResourceApi:
    """
    Base for the per-resource interfaces. Each one maps its methods to path
    templates and hands the call to the shared client.
    """

    def __init__(self, client: BlueBubblesClient) -> None:
        self._client = client
