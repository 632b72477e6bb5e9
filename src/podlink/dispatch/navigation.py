"""Adapter between deep links and the host's navigation layer."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from podlink.core.types import (
    AppRouteData,
    ContentType,
    Debug,
    DeepLinkData,
    DocumentDetail,
    DocumentRoute,
    DocumentsList,
    DocumentsRouteData,
    Drafts,
    MiniApp,
    Publish,
    SimpleRouteData,
)
from podlink.dispatch.manager import DeepLinkHandler

logger = logging.getLogger(__name__)


class Navigator(Protocol):
    """Navigation operations the host UI exposes to deep links.

    Each documents operation implies switching to the documents app.
    """

    def open_app(self, app: MiniApp) -> None: ...

    def navigate_to_documents_list(self) -> None: ...

    def navigate_to_document(self, document_id: int) -> None: ...

    def navigate_to_drafts(self) -> None: ...

    def navigate_to_publish(
        self,
        editing_draft_id: str | None,
        content_type: str,
        reply_to: str | None,
    ) -> None: ...

    def navigate_to_debug(self) -> None: ...


def create_navigation_handler(navigator: Navigator) -> DeepLinkHandler:
    """Create a handler that performs one navigator call per deep link.

    Args:
        navigator: Host navigation layer

    Returns:
        Handler suitable for DeepLinkManager.add_handler
    """

    def handle(data: DeepLinkData) -> None:
        logger.info(f"Navigating to deep-link: {data.original_url}")
        if data.app is MiniApp.DOCUMENTS and isinstance(data.route, DocumentsRouteData):
            _navigate_documents(navigator, data.route.route)
        elif data.app is MiniApp.DOCUMENTS:
            navigator.navigate_to_documents_list()
        else:
            navigator.open_app(data.app)

    return handle


def _navigate_documents(navigator: Navigator, route: DocumentRoute) -> None:
    match route:
        case DocumentsList():
            navigator.navigate_to_documents_list()
        case DocumentDetail(id=document_id) if document_id is not None:
            navigator.navigate_to_document(document_id)
        case Drafts():
            navigator.navigate_to_drafts()
        case Publish(content_type=content_type, reply_to=reply_to, editing_draft_id=draft_id):
            navigator.navigate_to_publish(
                draft_id,
                content_type or ContentType.DOCUMENT.value,
                reply_to,
            )
        case Debug():
            navigator.navigate_to_debug()
        case _:
            logger.warning(f"Unknown documents route: {route}, falling back to documents-list")
            navigator.navigate_to_documents_list()


@dataclass
class NavigationCall:
    """A navigator operation as recorded by LoggingNavigator."""

    operation: str
    arguments: dict[str, object] = field(default_factory=dict)


class LoggingNavigator:
    """Navigator that logs and records navigation instead of driving a UI.

    Tracks the route it would be showing, so it can also serve as the
    location provider for current-state URLs.
    """

    def __init__(self) -> None:
        self.calls: list[NavigationCall] = []
        self._current: AppRouteData | None = None

    def current_route(self) -> AppRouteData | None:
        return self._current

    def open_app(self, app: MiniApp) -> None:
        if app is MiniApp.DOCUMENTS:
            self._record("open_app", DocumentsRouteData(route=DocumentsList()), app=str(app))
        else:
            self._record("open_app", SimpleRouteData(app=app), app=str(app))

    def navigate_to_documents_list(self) -> None:
        self._record("navigate_to_documents_list", DocumentsRouteData(route=DocumentsList()))

    def navigate_to_document(self, document_id: int) -> None:
        self._record(
            "navigate_to_document",
            DocumentsRouteData(route=DocumentDetail(id=document_id)),
            document_id=document_id,
        )

    def navigate_to_drafts(self) -> None:
        self._record("navigate_to_drafts", DocumentsRouteData(route=Drafts()))

    def navigate_to_publish(
        self,
        editing_draft_id: str | None,
        content_type: str,
        reply_to: str | None,
    ) -> None:
        route = Publish(
            content_type=content_type,
            reply_to=reply_to,
            editing_draft_id=editing_draft_id,
        )
        self._record(
            "navigate_to_publish",
            DocumentsRouteData(route=route),
            editing_draft_id=editing_draft_id,
            content_type=content_type,
            reply_to=reply_to,
        )

    def navigate_to_debug(self) -> None:
        self._record("navigate_to_debug", DocumentsRouteData(route=Debug()))

    def _record(self, operation: str, location: AppRouteData, **arguments: object) -> None:
        logger.info(f"Navigation: {operation} {arguments}" if arguments else f"Navigation: {operation}")
        self.calls.append(NavigationCall(operation=operation, arguments=arguments))
        self._current = location
