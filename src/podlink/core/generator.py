"""URL generation for the podnet:// deep-link scheme.

The generator is the inverse of the parser: every URL it returns parses
back to the route it was built from. Routes come from application code, so
a route that cannot be expressed is a programming error and raises.
"""

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlencode, urlsplit, urlunsplit

from podlink.core.types import (
    SCHEME_PREFIX,
    AppRouteData,
    ContentType,
    Debug,
    DocumentDetail,
    DocumentRoute,
    DocumentsList,
    DocumentsRouteData,
    Drafts,
    GenerateUrlOptions,
    MiniApp,
    Publish,
)

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    """Anything that knows which route is currently shown."""

    def current_route(self) -> AppRouteData | None: ...


def generate_app_url(app: MiniApp, options: GenerateUrlOptions | None = None) -> str:
    """Generate a deep-link URL for a mini-app's base screen.

    Args:
        app: Target mini-app
        options: Scheme and extra query parameters

    Returns:
        URL such as "podnet://pod-collection/"
    """
    options = options or GenerateUrlOptions()
    return _build_url(f"{app}/", options.include_scheme, dict(options.params))


def generate_documents_url(route: DocumentRoute, options: GenerateUrlOptions | None = None) -> str:
    """Generate a deep-link URL for a documents route.

    Args:
        route: Documents route to encode
        options: Scheme and extra query parameters

    Returns:
        URL such as "podnet://documents/document/123"

    Raises:
        ValueError: If a document-detail route has no ID or the route type
            is unknown
    """
    options = options or GenerateUrlOptions()
    params = dict(options.params)

    match route:
        case DocumentsList():
            path = "/"
        case DocumentDetail(id=document_id):
            if document_id is None:
                raise ValueError("Document detail route requires an ID")
            path = f"/document/{document_id}"
        case Drafts():
            path = "/drafts"
        case Publish(content_type=content_type, reply_to=reply_to, editing_draft_id=draft_id):
            path = "/publish"
            if draft_id:
                params["editingDraftId"] = draft_id
            if content_type:
                params["contentType"] = content_type
            if reply_to:
                params["replyTo"] = reply_to
        case Debug():
            path = "/debug"
        case _:
            raise ValueError(f"Unknown documents route type: {getattr(route, 'type', route)}")

    return _build_url(f"{MiniApp.DOCUMENTS}{path}", options.include_scheme, params)


def _build_url(base: str, include_scheme: bool, params: dict[str, str | None]) -> str:
    url = f"{SCHEME_PREFIX}{base}" if include_scheme else base
    query = urlencode([(key, value) for key, value in params.items() if value is not None])
    return f"{url}?{query}" if query else url


def generate_route_url(route_data: AppRouteData, options: GenerateUrlOptions | None = None) -> str:
    """Generate a URL for app route data of any mini-app."""
    if isinstance(route_data, DocumentsRouteData):
        return generate_documents_url(route_data.route, options)
    return generate_app_url(route_data.app, options)


def generate_shareable_url(
    app: MiniApp,
    route: DocumentRoute | None = None,
    params: dict[str, str | None] | None = None,
) -> str:
    """Generate a URL for sharing; always includes the scheme."""
    options = GenerateUrlOptions(include_scheme=True, params=params or {})
    if app is MiniApp.DOCUMENTS and route is not None:
        return generate_documents_url(route, options)
    return generate_app_url(app, options)


def generate_current_state_url(
    location: LocationProvider | None = None,
    options: GenerateUrlOptions | None = None,
) -> str:
    """Generate a URL for whatever the navigator is currently showing.

    Falls back to the documents app when the current route is unknown.
    """
    current = location.current_route() if location is not None else None
    if current is None:
        logger.warning("No current route available, generating documents URL")
        return generate_app_url(MiniApp.DOCUMENTS, options)
    return generate_route_url(current, options)


class CommonUrls:
    """Shortcuts for frequently shared URLs."""

    @staticmethod
    def view_document(document_id: int) -> str:
        return generate_documents_url(DocumentDetail(id=document_id))

    @staticmethod
    def new_document(content_type: ContentType = ContentType.DOCUMENT) -> str:
        return generate_documents_url(Publish(content_type=content_type.value))

    @staticmethod
    def reply_to_document(
        reply_to: str,
        content_type: ContentType = ContentType.DOCUMENT,
    ) -> str:
        return generate_documents_url(Publish(content_type=content_type.value, reply_to=reply_to))

    @staticmethod
    def edit_draft(draft_id: str) -> str:
        return generate_documents_url(Publish(editing_draft_id=draft_id))

    @staticmethod
    def view_drafts() -> str:
        return generate_documents_url(Drafts())

    @staticmethod
    def view_documents() -> str:
        return generate_documents_url(DocumentsList())

    @staticmethod
    def pod_collection() -> str:
        return generate_app_url(MiniApp.POD_COLLECTION)

    @staticmethod
    def pod_editor() -> str:
        return generate_app_url(MiniApp.POD_EDITOR)

    @staticmethod
    def frog_crypto() -> str:
        return generate_app_url(MiniApp.FROGCRYPTO)


@dataclass(frozen=True)
class GeneratedUrlCheck:
    """Result of checking a generated URL."""

    valid: bool
    normalized_url: str
    error: str | None = None


def validate_generated_url(url: str) -> GeneratedUrlCheck:
    """Check that a URL uses the scheme and is structurally sound.

    Args:
        url: URL to check

    Returns:
        GeneratedUrlCheck with the URL re-serialized when valid
    """
    if not url.startswith(SCHEME_PREFIX):
        return GeneratedUrlCheck(
            valid=False,
            normalized_url=url,
            error=f"URL must start with {SCHEME_PREFIX}",
        )

    try:
        normalized = urlunsplit(urlsplit(url))
    except ValueError as e:
        return GeneratedUrlCheck(valid=False, normalized_url=url, error=f"Invalid URL format: {e}")

    return GeneratedUrlCheck(valid=True, normalized_url=normalized)
