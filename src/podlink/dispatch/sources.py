"""Sources of "URL opened" events.

The host runtime delivers URLs one or several at a time. A source accepts a
callback, and may return a function that removes it again.
"""

import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

UrlCallback = Callable[[list[str]], None]
Unlisten = Callable[[], None]


class UrlEventSource(Protocol):
    """External event source for opened deep-link URLs."""

    async def on_open_url(self, callback: UrlCallback) -> Unlisten | None: ...


class LocalUrlSource:
    """In-process URL event source.

    URLs handed to ``deliver`` (for example by the HTTP intake endpoint) are
    passed synchronously to every subscribed callback, in subscription order.
    """

    def __init__(self) -> None:
        self._callbacks: list[UrlCallback] = []

    async def on_open_url(self, callback: UrlCallback) -> Unlisten:
        """Subscribe a callback.

        Args:
            callback: Called with the list of URLs of each delivery

        Returns:
            Function that unsubscribes the callback
        """
        self._callbacks.append(callback)

        def unlisten() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unlisten

    def deliver(self, urls: list[str]) -> int:
        """Deliver URLs to all subscribers.

        Args:
            urls: URLs opened by the host

        Returns:
            Number of URLs delivered
        """
        if not self._callbacks:
            logger.warning(f"No subscribers for opened URLs: {urls}")
            return len(urls)

        for callback in list(self._callbacks):
            callback(list(urls))
        return len(urls)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)
