"""Core type definitions for the podnet:// deep-link scheme.

Routes are immutable values. The documents mini-app is the only destination
that carries a route payload; the other mini-apps are parameterless.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar, Literal, NotRequired, TypedDict

SCHEME = "podnet"
SCHEME_PREFIX = f"{SCHEME}://"


class MiniApp(StrEnum):
    """Top-level destinations addressable by a deep link."""

    DOCUMENTS = "documents"
    POD_COLLECTION = "pod-collection"
    POD_EDITOR = "pod-editor"
    FROGCRYPTO = "frogcrypto"


class ContentType(StrEnum):
    """Content kinds accepted by the publish screen."""

    DOCUMENT = "document"
    LINK = "link"
    FILE = "file"


VALID_APPS: tuple[MiniApp, ...] = tuple(MiniApp)
SIMPLE_APPS: tuple[MiniApp, ...] = (
    MiniApp.POD_COLLECTION,
    MiniApp.POD_EDITOR,
    MiniApp.FROGCRYPTO,
)
VALID_CONTENT_TYPES: frozenset[str] = frozenset(member.value for member in ContentType)


class DocumentRouteDict(TypedDict):
    """Dictionary representation of a documents route."""

    type: str
    id: NotRequired[int | None]
    contentType: NotRequired[str]
    replyTo: NotRequired[str]
    editingDraftId: NotRequired[str]


@dataclass(frozen=True)
class DocumentsList:
    """The documents list screen."""

    type: ClassVar[Literal["documents-list"]] = "documents-list"

    def to_dict(self) -> DocumentRouteDict:
        return {"type": self.type}


@dataclass(frozen=True)
class DocumentDetail:
    """A single document.

    ``id`` is only ``None`` on routes built by application code; the
    generator refuses such routes.
    """

    id: int | None = None
    type: ClassVar[Literal["document-detail"]] = "document-detail"

    def to_dict(self) -> DocumentRouteDict:
        return {"type": self.type, "id": self.id}


@dataclass(frozen=True)
class Drafts:
    """The drafts screen."""

    type: ClassVar[Literal["drafts"]] = "drafts"

    def to_dict(self) -> DocumentRouteDict:
        return {"type": self.type}


@dataclass(frozen=True)
class Publish:
    """The publish screen, optionally pre-filled.

    Values are stored as received. The parser does not check them; the
    validator does. An empty string means the field is absent and is
    stored as None.
    """

    content_type: str | None = None
    reply_to: str | None = None
    editing_draft_id: str | None = None
    type: ClassVar[Literal["publish"]] = "publish"

    def __post_init__(self) -> None:
        for name in ("content_type", "reply_to", "editing_draft_id"):
            if getattr(self, name) == "":
                object.__setattr__(self, name, None)

    def to_dict(self) -> DocumentRouteDict:
        result: DocumentRouteDict = {"type": self.type}
        if self.content_type:
            result["contentType"] = self.content_type
        if self.reply_to:
            result["replyTo"] = self.reply_to
        if self.editing_draft_id:
            result["editingDraftId"] = self.editing_draft_id
        return result


@dataclass(frozen=True)
class Debug:
    """The debug screen."""

    type: ClassVar[Literal["debug"]] = "debug"

    def to_dict(self) -> DocumentRouteDict:
        return {"type": self.type}


DocumentRoute = DocumentsList | DocumentDetail | Drafts | Publish | Debug

# Single source of truth for the documents route variants
DOCUMENT_ROUTE_TYPES: dict[str, type[DocumentRoute]] = {
    DocumentsList.type: DocumentsList,
    DocumentDetail.type: DocumentDetail,
    Drafts.type: Drafts,
    Publish.type: Publish,
    Debug.type: Debug,
}


class AppRouteDict(TypedDict):
    """Dictionary representation of app route data."""

    app: str
    route: NotRequired[DocumentRouteDict]


@dataclass(frozen=True)
class DocumentsRouteData:
    """Route data for the documents mini-app."""

    route: DocumentRoute
    app: Literal[MiniApp.DOCUMENTS] = MiniApp.DOCUMENTS

    def to_dict(self) -> AppRouteDict:
        return {"app": str(self.app), "route": self.route.to_dict()}


@dataclass(frozen=True)
class SimpleRouteData:
    """Route data for the parameterless mini-apps.

    ``route`` is always ``None`` when produced by the parser.
    """

    app: MiniApp
    route: DocumentRoute | None = None

    def to_dict(self) -> AppRouteDict:
        result: AppRouteDict = {"app": str(self.app)}
        if self.route is not None:
            result["route"] = self.route.to_dict()
        return result


AppRouteData = DocumentsRouteData | SimpleRouteData


class DeepLinkDict(TypedDict):
    """Dictionary representation of deep-link data."""

    app: str
    route: AppRouteDict | None
    valid: bool
    originalUrl: str


@dataclass(frozen=True)
class DeepLinkData:
    """Parsed (and possibly sanitized) deep link."""

    app: MiniApp
    route: AppRouteData | None
    valid: bool
    original_url: str

    def to_dict(self) -> DeepLinkDict:
        return {
            "app": str(self.app),
            "route": self.route.to_dict() if self.route is not None else None,
            "valid": self.valid,
            "originalUrl": self.original_url,
        }


class ParseResultDict(TypedDict):
    """Dictionary representation of a parse result."""

    success: bool
    data: NotRequired[DeepLinkDict]
    error: NotRequired[str]


@dataclass(frozen=True)
class ParseSuccess:
    data: DeepLinkData
    success: ClassVar[Literal[True]] = True

    def to_dict(self) -> ParseResultDict:
        return {"success": True, "data": self.data.to_dict()}


@dataclass(frozen=True)
class ParseFailure:
    error: str
    success: ClassVar[Literal[False]] = False

    def to_dict(self) -> ParseResultDict:
        return {"success": False, "error": self.error}


ParseResult = ParseSuccess | ParseFailure


class IssueSeverity(StrEnum):
    """How a validation issue affected the route.

    ``corrected`` and ``notice`` are both reported as warnings: the first
    means a field was replaced with a default, the second that nothing was
    changed.
    """

    ERROR = "error"
    CORRECTED = "corrected"
    NOTICE = "notice"


@dataclass(frozen=True)
class ValidationIssue:
    severity: IssueSeverity
    message: str

    @property
    def is_error(self) -> bool:
        return self.severity is IssueSeverity.ERROR


class ValidationResultDict(TypedDict):
    """Dictionary representation of a validation result."""

    valid: bool
    data: DeepLinkDict
    warnings: list[str]
    errors: list[str]


@dataclass(frozen=True)
class ValidationResult:
    """Validator output. ``data`` is always navigable."""

    data: DeepLinkData
    issues: tuple[ValidationIssue, ...] = ()

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if not issue.is_error]

    @property
    def errors(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.is_error]

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> ValidationResultDict:
        return {
            "valid": self.valid,
            "data": self.data.to_dict(),
            "warnings": self.warnings,
            "errors": self.errors,
        }


@dataclass(frozen=True)
class GenerateUrlOptions:
    """Options for URL generation."""

    include_scheme: bool = True
    params: dict[str, str | None] = field(default_factory=dict)


# Path grammar per app, for documentation and help output
ROUTE_PATTERNS: dict[MiniApp, dict[str, str]] = {
    MiniApp.DOCUMENTS: {
        DocumentsList.type: "/",
        DocumentDetail.type: "/document/:id",
        Drafts.type: "/drafts",
        Publish.type: "/publish",
        Debug.type: "/debug",
    },
    MiniApp.POD_COLLECTION: {"default": "/"},
    MiniApp.POD_EDITOR: {"default": "/"},
    MiniApp.FROGCRYPTO: {"default": "/"},
}

DEFAULT_ROUTES: dict[MiniApp, DocumentRoute | None] = {
    MiniApp.DOCUMENTS: DocumentsList(),
    MiniApp.POD_COLLECTION: None,
    MiniApp.POD_EDITOR: None,
    MiniApp.FROGCRYPTO: None,
}


def route_from_dict(data: object) -> DocumentRoute:
    """Build a documents route from its dictionary representation.

    Args:
        data: Decoded JSON object with a ``type`` key

    Returns:
        DocumentRoute instance

    Raises:
        ValueError: If the object is not a valid route description
    """
    if not isinstance(data, dict):
        raise ValueError("route must be an object")

    route_type = data.get("type")
    if route_type not in DOCUMENT_ROUTE_TYPES:
        valid_types = ", ".join(DOCUMENT_ROUTE_TYPES)
        raise ValueError(f"Unknown documents route type: {route_type}. Valid types: {valid_types}")

    if route_type == DocumentDetail.type:
        document_id = data.get("id")
        if document_id is not None and (
            not isinstance(document_id, int) or isinstance(document_id, bool)
        ):
            raise ValueError("route.id must be an integer")
        return DocumentDetail(id=document_id)

    if route_type == Publish.type:
        values: dict[str, str | None] = {}
        for key in ("contentType", "replyTo", "editingDraftId"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"route.{key} must be a string")
            values[key] = value
        return Publish(
            content_type=values["contentType"],
            reply_to=values["replyTo"],
            editing_draft_id=values["editingDraftId"],
        )

    return DOCUMENT_ROUTE_TYPES[route_type]()
