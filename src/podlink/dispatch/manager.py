"""Deep-link dispatch manager.

Owns the single subscription to the host's "URL opened" events and fans
validated deep links out to registered handlers.
"""

import logging
from collections.abc import Callable

from podlink.core.parser import create_fallback_deep_link
from podlink.core.types import DeepLinkData
from podlink.core.validator import is_navigable_deep_link, validate_deep_link_url
from podlink.dispatch.sources import Unlisten, UrlEventSource

logger = logging.getLogger(__name__)

DeepLinkHandler = Callable[[DeepLinkData], None]


class DeepLinkManager:
    """Receives opened URLs and notifies handlers with navigable routes.

    Create one instance per running application and pass it to the code that
    needs to register handlers. URLs are processed in arrival order, and all
    handlers are notified for one URL before the next URL is processed.
    """

    def __init__(self, source: UrlEventSource) -> None:
        """Initialize the manager.

        Args:
            source: Event source delivering opened URLs
        """
        self._source = source
        self._handlers: list[DeepLinkHandler] = []
        self._listening = False
        self._starting = False
        self._unlisten: Unlisten | None = None

    async def start_listening(self) -> None:
        """Subscribe to the event source.

        Calling this while already listening (or while a subscription is
        pending) does nothing.

        Raises:
            Exception: Whatever the event source raised while subscribing
        """
        if self._listening or self._starting:
            logger.warning("Deep-link manager is already listening")
            return

        self._starting = True
        try:
            self._unlisten = await self._source.on_open_url(self._on_open_url)
        except Exception:
            logger.exception("Failed to start deep-link listener")
            raise
        finally:
            self._starting = False

        self._listening = True
        logger.info("Deep-link manager started listening")

    def stop_listening(self) -> None:
        """Stop processing future events.

        A URL that is already being handled is not interrupted.
        """
        if self._unlisten is not None:
            self._unlisten()
            self._unlisten = None

        self._listening = False
        logger.info("Deep-link manager stopped listening")

    def _on_open_url(self, urls: list[str]) -> None:
        if not self._listening:
            logger.debug(f"Ignoring deep-link URLs received while stopped: {urls}")
            return

        logger.info(f"Deep-link received: {urls}")
        for url in urls:
            self.handle_deep_link_url(url)

    def add_handler(self, handler: DeepLinkHandler) -> None:
        """Register a handler. The same handler may be registered twice."""
        self._handlers.append(handler)

    def remove_handler(self, handler: DeepLinkHandler) -> None:
        """Remove the first registration of a handler, if any."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    def clear_handlers(self) -> None:
        self._handlers = []

    def handle_deep_link_url(self, url: str) -> None:
        """Validate a URL and notify all handlers.

        Invalid URLs are replaced with a safe fallback, so handlers always
        receive navigable data.

        Args:
            url: Raw URL string
        """
        logger.info(f"Processing deep-link URL: {url}")

        try:
            validation = validate_deep_link_url(url)
        except Exception:
            logger.exception(f"Error processing deep-link URL: {url}")
            self._notify_handlers(create_fallback_deep_link(url))
            return

        if validation.warnings:
            logger.warning(f"Deep-link validation warnings: {validation.warnings}")
        if validation.errors:
            logger.error(f"Deep-link validation errors: {validation.errors}")

        data = validation.data
        if not is_navigable_deep_link(data):
            logger.error("Deep-link data is not navigable, falling back to safe default")
            data = create_fallback_deep_link(url)

        self._notify_handlers(data)

    def _notify_handlers(self, data: DeepLinkData) -> None:
        if not self._handlers:
            logger.warning(f"No deep-link handlers registered, ignoring deep-link: {data.original_url}")
            return

        for handler in list(self._handlers):
            try:
                handler(data)
            except Exception:
                logger.exception("Error in deep-link handler")

    @property
    def is_active(self) -> bool:
        return self._listening

    @property
    def handler_count(self) -> int:
        return len(self._handlers)
