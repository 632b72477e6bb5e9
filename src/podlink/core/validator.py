"""Deep-link validator with fallback handling.

``validate_deep_link_url`` is the entry point for untrusted URLs. It never
raises and always returns navigable data, reporting what it had to change.
"""

import logging
import re
from dataclasses import replace
from urllib.parse import urlsplit

from podlink.core.parser import (
    create_fallback_deep_link,
    is_valid_deep_link_url,
    parse_deep_link_url,
)
from podlink.core.types import (
    DEFAULT_ROUTES,
    VALID_APPS,
    VALID_CONTENT_TYPES,
    AppRouteData,
    ContentType,
    Debug,
    DeepLinkData,
    DocumentDetail,
    DocumentRoute,
    DocumentsList,
    DocumentsRouteData,
    Drafts,
    IssueSeverity,
    MiniApp,
    ParseFailure,
    Publish,
    SimpleRouteData,
    ValidationIssue,
    ValidationResult,
)

logger = logging.getLogger(__name__)

_UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)
_REPLY_TO_PATTERN = re.compile(r"post_[0-9]+:[0-9]+")


def validate_deep_link_url(url: str) -> ValidationResult:
    """Validate a deep-link URL and return sanitized data.

    Args:
        url: Raw URL string, possibly malformed

    Returns:
        ValidationResult whose data is always navigable. Errors mean the
        route was replaced with the default; warnings mean it was kept,
        possibly with a single field corrected.
    """
    if not is_valid_deep_link_url(url):
        return _fallback_result(url, "Invalid deep-link URL format")

    parse_result = parse_deep_link_url(url)
    if isinstance(parse_result, ParseFailure):
        return _fallback_result(url, parse_result.error or "Failed to parse URL")

    data = parse_result.data
    issues = _validate_app_specific_data(data)
    sanitized = apply_safety_fallbacks(data, issues)

    valid = not any(issue.is_error for issue in issues)
    if sanitized.valid != valid:
        sanitized = replace(sanitized, valid=valid)

    return ValidationResult(data=sanitized, issues=tuple(issues))


def _fallback_result(url: str, error: str) -> ValidationResult:
    return ValidationResult(
        data=create_fallback_deep_link(url),
        issues=(ValidationIssue(IssueSeverity.ERROR, error),),
    )


def _validate_app_specific_data(data: DeepLinkData) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    match data.app:
        case MiniApp.DOCUMENTS:
            if isinstance(data.route, DocumentsRouteData):
                issues.extend(_validate_documents_route(data.route.route))
        case MiniApp.POD_COLLECTION | MiniApp.POD_EDITOR | MiniApp.FROGCRYPTO:
            has_payload = data.route is not None and data.route.route is not None
            if has_payload or _has_route_parameters(data.original_url):
                issues.append(
                    ValidationIssue(
                        IssueSeverity.NOTICE,
                        f"{data.app} doesn't support route parameters, ignoring",
                    )
                )
        case _:
            issues.append(ValidationIssue(IssueSeverity.ERROR, f"Unknown app: {data.app}"))

    return issues


def _validate_documents_route(route: DocumentRoute) -> list[ValidationIssue]:
    """Check documents route values.

    Content types are corrected later by the safety fallbacks, so an invalid
    one is reported as ``corrected``. Reply targets and draft IDs are left
    untouched and only reported as ``notice``.
    """
    issues: list[ValidationIssue] = []

    match route:
        case DocumentDetail(id=document_id):
            if not _is_positive_id(document_id):
                issues.append(
                    ValidationIssue(
                        IssueSeverity.ERROR,
                        "Document detail route requires a valid document ID",
                    )
                )
        case Publish(content_type=content_type, reply_to=reply_to, editing_draft_id=draft_id):
            if content_type and not is_valid_content_type(content_type):
                issues.append(
                    ValidationIssue(
                        IssueSeverity.CORRECTED,
                        f"Invalid contentType: {content_type}, falling back to {ContentType.DOCUMENT}",
                    )
                )
            if reply_to and not is_valid_reply_to(reply_to):
                issues.append(
                    ValidationIssue(
                        IssueSeverity.NOTICE,
                        f"Invalid replyTo format: {reply_to}, should be post_<id>:<docId>",
                    )
                )
            if draft_id and not is_valid_uuid(draft_id):
                issues.append(
                    ValidationIssue(
                        IssueSeverity.NOTICE,
                        f"Invalid editingDraftId format: {draft_id}, should be UUID",
                    )
                )
        case DocumentsList() | Drafts() | Debug():
            pass
        case _:
            issues.append(
                ValidationIssue(
                    IssueSeverity.ERROR,
                    f"Unknown documents route type: {getattr(route, 'type', route)}",
                )
            )

    return issues


def apply_safety_fallbacks(data: DeepLinkData, issues: list[ValidationIssue]) -> DeepLinkData:
    """Re-check route invariants and repair anything that is not navigable.

    Runs independently of the per-route checks. Appends a warning to
    ``issues`` for every whole-route replacement it makes.

    Args:
        data: Parsed deep-link data
        issues: Issue list to extend

    Returns:
        Navigable deep-link data
    """
    if data.app not in VALID_APPS:
        issues.append(
            ValidationIssue(
                IssueSeverity.CORRECTED,
                f"Invalid app {data.app}, falling back to {MiniApp.DOCUMENTS}",
            )
        )
        return _documents_list(data)

    if data.app is not MiniApp.DOCUMENTS:
        if not isinstance(data.route, SimpleRouteData) or data.route.app is not data.app:
            return replace(data, route=SimpleRouteData(app=data.app))
        return data

    if not isinstance(data.route, DocumentsRouteData):
        issues.append(
            ValidationIssue(
                IssueSeverity.CORRECTED,
                "Missing documents route, falling back to documents list",
            )
        )
        return _documents_list(data)

    route = data.route.route
    match route:
        case DocumentDetail(id=document_id) if not _is_positive_id(document_id):
            issues.append(
                ValidationIssue(
                    IssueSeverity.CORRECTED,
                    "Invalid document ID, falling back to documents list",
                )
            )
            return _documents_list(data)
        case Publish(content_type=content_type) if content_type and not is_valid_content_type(
            content_type
        ):
            corrected = replace(route, content_type=ContentType.DOCUMENT.value)
            return replace(data, route=DocumentsRouteData(route=corrected))
        case DocumentsList() | DocumentDetail() | Drafts() | Publish() | Debug():
            return data

    issues.append(
        ValidationIssue(
            IssueSeverity.CORRECTED,
            "Unknown documents route, falling back to documents list",
        )
    )
    return _documents_list(data)


def _documents_list(data: DeepLinkData) -> DeepLinkData:
    return replace(
        data,
        app=MiniApp.DOCUMENTS,
        route=DocumentsRouteData(route=DocumentsList()),
        valid=False,
    )


def _has_route_parameters(url: str) -> bool:
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return False
    return parts.path not in ("", "/") or bool(parts.query)


def _is_positive_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def is_valid_content_type(value: str) -> bool:
    return value in VALID_CONTENT_TYPES


def is_valid_uuid(value: str) -> bool:
    """Check for canonical UUID (versions 1 through 5) form."""
    return _UUID_PATTERN.fullmatch(value) is not None


def is_valid_reply_to(value: str) -> bool:
    """Check for the ``post_<id>:<docId>`` reply target form."""
    return _REPLY_TO_PATTERN.fullmatch(value) is not None


def get_safe_deep_link_data(url: str) -> DeepLinkData:
    """Return navigable deep-link data for any input."""
    try:
        return validate_deep_link_url(url).data
    except Exception:
        logger.exception(f"Error validating deep-link URL: {url}")
        return create_fallback_deep_link(url)


def is_navigable_deep_link(data: DeepLinkData) -> bool:
    """Check whether the navigation collaborator can act on this data."""
    if data.app not in VALID_APPS:
        return False

    if data.app is not MiniApp.DOCUMENTS:
        return True

    if not isinstance(data.route, DocumentsRouteData):
        return False

    match data.route.route:
        case DocumentDetail(id=document_id):
            return _is_positive_id(document_id)
        case Publish(content_type=content_type):
            return not content_type or is_valid_content_type(content_type)
        case DocumentsList() | Drafts() | Debug():
            return True
        case _:
            return False


def default_route_for(app: MiniApp) -> AppRouteData:
    """Return the route an app opens on when no path is given."""
    default = DEFAULT_ROUTES[app]
    if default is not None:
        return DocumentsRouteData(route=default)
    return SimpleRouteData(app=app)
