"""aiohttp server for podlink.

Application factory wiring the deep-link intake endpoint to a single
DeepLinkManager, plus the link utility endpoints.
"""

import logging

from aiohttp import web

from podlink.api.intake import create_intake_routes
from podlink.api.links import create_links_routes
from podlink.app_keys import location_key, manager_key, source_key
from podlink.config import Config
from podlink.core.generator import LocationProvider
from podlink.dispatch.manager import DeepLinkManager
from podlink.dispatch.navigation import LoggingNavigator, Navigator, create_navigation_handler
from podlink.dispatch.sources import LocalUrlSource

logger = logging.getLogger(__name__)


def create_app(
    config: Config,
    *,
    navigator: Navigator | None = None,
    location: LocationProvider | None = None,
) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        navigator: Host navigation layer (default: LoggingNavigator)
        location: Provider of the current route for current-state URLs
            (default: the navigator, when it is a LoggingNavigator)

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    if navigator is None:
        navigator = LoggingNavigator()
    if location is None and isinstance(navigator, LoggingNavigator):
        location = navigator

    source = LocalUrlSource()
    manager = DeepLinkManager(source)
    manager.add_handler(create_navigation_handler(navigator))

    app[source_key] = source
    app[manager_key] = manager
    if location is not None:
        app[location_key] = location

    app.router.add_routes(create_intake_routes())
    app.router.add_routes(create_links_routes())

    app.on_startup.append(_start_listening)
    app.on_cleanup.append(_stop_listening)

    logger.debug(f"Created deep-link app for {config.server.base_url}")
    return app


async def _start_listening(app: web.Application) -> None:
    """Start the deep-link manager on application startup."""
    await app[manager_key].start_listening()


async def _stop_listening(app: web.Application) -> None:
    """Stop the deep-link manager on application cleanup."""
    manager = app[manager_key]
    manager.stop_listening()
    manager.clear_handlers()


def run_server(config: Config, *, navigator: Navigator | None = None) -> None:
    """Run the server.

    Args:
        config: Application configuration
        navigator: Host navigation layer (default: LoggingNavigator)
    """
    app = create_app(config, navigator=navigator)
    web.run_app(app, host=config.server.host, port=config.server.port)
