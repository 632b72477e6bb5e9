"""Deep-link dispatch: event sources, manager and navigation adapter."""

from .manager import DeepLinkHandler, DeepLinkManager
from .navigation import LoggingNavigator, Navigator, create_navigation_handler
from .sources import LocalUrlSource, UrlEventSource

__all__ = [
    "DeepLinkHandler",
    "DeepLinkManager",
    "LocalUrlSource",
    "LoggingNavigator",
    "Navigator",
    "UrlEventSource",
    "create_navigation_handler",
]
