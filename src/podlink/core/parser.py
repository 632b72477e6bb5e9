"""URL parser for the podnet:// deep-link scheme.

Turns untrusted strings into route values. Failures are returned as
``ParseFailure`` values; nothing in this module raises on bad input.

Examples:
    podnet://documents/                        documents-list
    podnet://documents/document/123            document-detail, id=123
    podnet://documents/publish?contentType=link  publish with parameters
    podnet://pod-collection/                   pod-collection app
"""

import logging
import re
from urllib.parse import SplitResult, parse_qsl, urlsplit

from podlink.core.types import (
    DEFAULT_ROUTES,
    SCHEME_PREFIX,
    VALID_APPS,
    Debug,
    DeepLinkData,
    DocumentDetail,
    DocumentRoute,
    DocumentsList,
    DocumentsRouteData,
    Drafts,
    MiniApp,
    ParseFailure,
    ParseResult,
    ParseSuccess,
    Publish,
    SimpleRouteData,
)

logger = logging.getLogger(__name__)

_DOCUMENT_ID_PATTERN = re.compile(r"-?[0-9]+")
_VALID_APP_NAMES = frozenset(app.value for app in VALID_APPS)


class _InvalidRouteError(ValueError):
    """Raised internally when a route segment cannot be parsed."""


def parse_deep_link_url(url: str) -> ParseResult:
    """Parse a deep-link URL into structured data.

    Args:
        url: Raw URL string, possibly malformed

    Returns:
        ParseSuccess with the deep-link data, or ParseFailure with a message
    """
    normalized = url.strip()
    if not normalized.startswith(SCHEME_PREFIX):
        return ParseFailure(error=f"URL must start with {SCHEME_PREFIX}")

    try:
        parts = urlsplit(normalized)
        app_name = _app_name(parts)
    except ValueError as e:
        return ParseFailure(error=f"Failed to parse URL: {e}")

    if app_name not in _VALID_APP_NAMES:
        valid_apps = ", ".join(VALID_APPS)
        return ParseFailure(error=f"Invalid app name: {app_name}. Valid apps: {valid_apps}")

    app = MiniApp(app_name)
    params = dict(parse_qsl(parts.query, keep_blank_values=True))

    try:
        route = _parse_app_route(app, parts.path, params)
    except _InvalidRouteError as e:
        return ParseFailure(error=f"Failed to parse URL: {e}")

    return ParseSuccess(
        data=DeepLinkData(app=app, route=route, valid=True, original_url=url),
    )


def _app_name(parts: SplitResult) -> str:
    # App names are case-sensitive; userinfo and port are dropped
    host = parts.netloc.rpartition("@")[2]
    return host.partition(":")[0]


def _parse_app_route(
    app: MiniApp,
    path: str,
    params: dict[str, str],
) -> DocumentsRouteData | SimpleRouteData:
    if app is MiniApp.DOCUMENTS:
        return DocumentsRouteData(route=_parse_documents_route(path, params))
    return SimpleRouteData(app=app)


def _parse_documents_route(path: str, params: dict[str, str]) -> DocumentRoute:
    """Match documents path segments against the known route patterns.

    Args:
        path: URL path (e.g., "/document/123")
        params: Query parameters

    Returns:
        Matching documents route

    Raises:
        _InvalidRouteError: If a document ID is not numeric
    """
    segments = [segment for segment in path.split("/") if segment]

    if not segments:
        return DocumentsList()

    match segments:
        case ["document", raw_id, *_]:
            if not _DOCUMENT_ID_PATTERN.fullmatch(raw_id):
                raise _InvalidRouteError(f"Invalid document ID: {raw_id}")
            try:
                document_id = int(raw_id)
            except ValueError as e:
                # int() refuses digit strings over sys.get_int_max_str_digits()
                raise _InvalidRouteError(f"Document ID is too long ({len(raw_id)} digits)") from e
            return DocumentDetail(id=document_id)
        case ["drafts", *_]:
            return Drafts()
        case ["publish", *_]:
            return Publish(
                content_type=params.get("contentType") or None,
                reply_to=params.get("replyTo") or None,
                editing_draft_id=params.get("editingDraftId") or None,
            )
        case ["debug", *_]:
            return Debug()

    # Unknown paths stay navigable so newer links still open something
    logger.warning(f"Unknown documents route: {path}, falling back to documents-list")
    return DocumentsList()


def create_fallback_deep_link(original_url: str, app: MiniApp | None = None) -> DeepLinkData:
    """Create deep-link data for a URL that could not be used.

    Args:
        original_url: URL that failed parsing or validation
        app: Preferred app; defaults to documents

    Returns:
        Navigable DeepLinkData marked invalid
    """
    fallback_app = app if app in VALID_APPS else MiniApp.DOCUMENTS
    fallback_route = DEFAULT_ROUTES[fallback_app]

    route: DocumentsRouteData | SimpleRouteData
    if fallback_route is not None:
        route = DocumentsRouteData(route=fallback_route)
    else:
        route = SimpleRouteData(app=fallback_app)

    return DeepLinkData(app=fallback_app, route=route, valid=False, original_url=original_url)


def is_valid_deep_link_url(url: str) -> bool:
    """Check scheme and app name without parsing the route."""
    normalized = url.strip()
    if not normalized.startswith(SCHEME_PREFIX):
        return False

    try:
        return _app_name(urlsplit(normalized)) in _VALID_APP_NAMES
    except ValueError:
        return False
