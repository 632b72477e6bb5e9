"""Tests for deep-link URL generation."""

import logging

import pytest
from podlink.core.generator import (
    CommonUrls,
    generate_app_url,
    generate_current_state_url,
    generate_documents_url,
    generate_route_url,
    generate_shareable_url,
    validate_generated_url,
)
from podlink.core.parser import parse_deep_link_url
from podlink.core.types import (
    VALID_APPS,
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
    ParseSuccess,
    Publish,
    SimpleRouteData,
)
from podlink.core.validator import default_route_for, validate_deep_link_url

DRAFT_ID = "123e4567-e89b-12d3-a456-426614174000"


class _FixedLocation:
    def __init__(self, route: AppRouteData | None) -> None:
        self._route = route

    def current_route(self) -> AppRouteData | None:
        return self._route


class TestGenerateAppUrl:
    """Tests for generate_app_url()."""

    @pytest.mark.parametrize("app", list(MiniApp))
    def test__app__returns_base_url(self, app: MiniApp) -> None:
        """Generate the base URL of each app."""
        assert generate_app_url(app) == f"podnet://{app}/"

    def test__without_scheme__omits_prefix(self) -> None:
        """Omit the scheme on request."""
        url = generate_app_url(MiniApp.POD_EDITOR, GenerateUrlOptions(include_scheme=False))

        assert url == "pod-editor/"

    def test__params__appended_as_query(self) -> None:
        """Extra parameters become the query; None values are dropped."""
        options = GenerateUrlOptions(params={"level": "3", "skip": None, "name": "a b"})

        assert generate_app_url(MiniApp.FROGCRYPTO, options) == "podnet://frogcrypto/?level=3&name=a+b"


class TestGenerateDocumentsUrl:
    """Tests for generate_documents_url()."""

    @pytest.mark.parametrize(
        ("route", "expected"),
        [
            (DocumentsList(), "podnet://documents/"),
            (DocumentDetail(id=123), "podnet://documents/document/123"),
            (Drafts(), "podnet://documents/drafts"),
            (Publish(), "podnet://documents/publish"),
            (Debug(), "podnet://documents/debug"),
        ],
    )
    def test__route__returns_path(self, route: DocumentRoute, expected: str) -> None:
        """Each route type maps to its path."""
        assert generate_documents_url(route) == expected

    def test__publish_params__only_set_values(self) -> None:
        """Publish appends only the values that are set, encoded."""
        url = generate_documents_url(Publish(content_type="link", reply_to="post_123:456"))

        assert url == "podnet://documents/publish?contentType=link&replyTo=post_123%3A456"

    def test__publish_all_params__in_fixed_order(self) -> None:
        """Publish parameters are emitted in a stable order."""
        url = generate_documents_url(
            Publish(content_type="file", reply_to="post_1:2", editing_draft_id=DRAFT_ID)
        )

        assert url == (
            f"podnet://documents/publish?editingDraftId={DRAFT_ID}"
            "&contentType=file&replyTo=post_1%3A2"
        )

    def test__missing_id__raises(self) -> None:
        """A document-detail route without an ID is a programming error."""
        with pytest.raises(ValueError, match="requires an ID"):
            generate_documents_url(DocumentDetail())

    def test__unknown_route__raises(self) -> None:
        """Objects that are not documents routes are rejected."""
        with pytest.raises(ValueError, match="Unknown documents route type"):
            generate_documents_url(object())  # type: ignore[arg-type]

    def test__without_scheme__omits_prefix(self) -> None:
        """Omit the scheme on request."""
        url = generate_documents_url(Drafts(), GenerateUrlOptions(include_scheme=False))

        assert url == "documents/drafts"

    def test__extra_params__merged_with_route_params(self) -> None:
        """Caller parameters come before route parameters."""
        url = generate_documents_url(
            Publish(content_type="document"),
            GenerateUrlOptions(params={"source": "share"}),
        )

        assert url == "podnet://documents/publish?source=share&contentType=document"


class TestRoundTrip:
    """Generated URLs parse back to the original route."""

    ROUTES: list[DocumentRoute] = [
        DocumentsList(),
        DocumentDetail(id=1),
        DocumentDetail(id=987654321),
        Drafts(),
        Debug(),
        Publish(),
        Publish(content_type="document"),
        Publish(content_type="link", reply_to="post_123:456"),
        Publish(editing_draft_id=DRAFT_ID),
        Publish(content_type="file", reply_to="post_1:2", editing_draft_id=DRAFT_ID),
        Publish(reply_to="text with spaces & symbols=?/#%"),
        Publish(content_type="", reply_to="", editing_draft_id=""),
    ]

    @pytest.mark.parametrize("route", ROUTES)
    def test__generated_url__parses_to_same_route(self, route: DocumentRoute) -> None:
        """parse(generate(route)) returns the route."""
        result = parse_deep_link_url(generate_documents_url(route))

        assert isinstance(result, ParseSuccess)
        assert result.data.route == DocumentsRouteData(route=route)

    @pytest.mark.parametrize("app", list(MiniApp))
    def test__default_route__validates_cleanly(self, app: MiniApp) -> None:
        """validate(generate(default route)) has no issues for every app."""
        url = generate_route_url(default_route_for(app))
        result = validate_deep_link_url(url)

        assert result.valid is True
        assert result.warnings == []
        assert result.errors == []
        assert result.data.app is app

    @pytest.mark.parametrize(
        "url",
        [
            "podnet://documents/",
            "podnet://documents/document/5",
            "podnet://documents/drafts",
            "podnet://documents/debug",
            "podnet://documents/publish?contentType=link&replyTo=post_1%3A2",
        ],
    )
    def test__parsed_url__generates_same_url(self, url: str) -> None:
        """generate(parse(url)) returns a canonical URL equal to the input."""
        result = parse_deep_link_url(url)

        assert isinstance(result, ParseSuccess)
        assert result.data.route is not None
        assert generate_route_url(result.data.route) == url


class TestGenerateRouteUrl:
    """Tests for generate_route_url()."""

    def test__simple_route__returns_app_url(self) -> None:
        """Simple route data generates the app URL."""
        assert generate_route_url(SimpleRouteData(app=MiniApp.POD_COLLECTION)) == (
            "podnet://pod-collection/"
        )


class TestGenerateShareableUrl:
    """Tests for generate_shareable_url()."""

    def test__documents_route__includes_scheme(self) -> None:
        """Shareable URLs always include the scheme."""
        assert generate_shareable_url(MiniApp.DOCUMENTS, DocumentDetail(id=9)) == (
            "podnet://documents/document/9"
        )

    def test__documents_without_route__returns_app_url(self) -> None:
        """Without a route, the app URL is returned."""
        assert generate_shareable_url(MiniApp.DOCUMENTS) == "podnet://documents/"

    def test__simple_app_ignores_route(self) -> None:
        """Routes are ignored for simple apps."""
        assert generate_shareable_url(MiniApp.FROGCRYPTO, Drafts(), {"a": "1"}) == (
            "podnet://frogcrypto/?a=1"
        )


class TestGenerateCurrentStateUrl:
    """Tests for generate_current_state_url()."""

    def test__known_location__returns_its_url(self) -> None:
        """The current route is encoded."""
        location = _FixedLocation(DocumentsRouteData(route=DocumentDetail(id=3)))

        assert generate_current_state_url(location) == "podnet://documents/document/3"

    def test__no_location__falls_back_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """Without a location the documents URL is returned."""
        with caplog.at_level(logging.WARNING, logger="podlink.core.generator"):
            url = generate_current_state_url(_FixedLocation(None))

        assert url == "podnet://documents/"
        assert "No current route available" in caplog.text


class TestCommonUrls:
    """Tests for CommonUrls shortcuts."""

    def test__document_urls(self) -> None:
        """Documents shortcuts."""
        assert CommonUrls.view_document(123) == "podnet://documents/document/123"
        assert CommonUrls.new_document() == "podnet://documents/publish?contentType=document"
        assert CommonUrls.new_document(ContentType.LINK) == "podnet://documents/publish?contentType=link"
        assert CommonUrls.reply_to_document("post_1:2") == (
            "podnet://documents/publish?contentType=document&replyTo=post_1%3A2"
        )
        assert CommonUrls.edit_draft(DRAFT_ID) == f"podnet://documents/publish?editingDraftId={DRAFT_ID}"
        assert CommonUrls.view_drafts() == "podnet://documents/drafts"
        assert CommonUrls.view_documents() == "podnet://documents/"

    def test__app_urls(self) -> None:
        """Simple app shortcuts."""
        assert CommonUrls.pod_collection() == "podnet://pod-collection/"
        assert CommonUrls.pod_editor() == "podnet://pod-editor/"
        assert CommonUrls.frog_crypto() == "podnet://frogcrypto/"

    def test__all_shortcuts__validate_cleanly(self) -> None:
        """Every shortcut produces a valid URL."""
        urls = [
            CommonUrls.view_document(1),
            CommonUrls.new_document(ContentType.FILE),
            CommonUrls.reply_to_document("post_5:6", ContentType.LINK),
            CommonUrls.edit_draft(DRAFT_ID),
            CommonUrls.view_drafts(),
            CommonUrls.view_documents(),
            CommonUrls.pod_collection(),
            CommonUrls.pod_editor(),
            CommonUrls.frog_crypto(),
        ]

        for url in urls:
            result = validate_deep_link_url(url)
            assert result.valid, url
            assert result.warnings == [], url


class TestValidateGeneratedUrl:
    """Tests for validate_generated_url()."""

    def test__generated_url__is_valid(self) -> None:
        """Generated URLs pass the check unchanged."""
        check = validate_generated_url("podnet://documents/document/1")

        assert check.valid is True
        assert check.normalized_url == "podnet://documents/document/1"
        assert check.error is None

    def test__wrong_scheme__is_invalid(self) -> None:
        """Other schemes fail."""
        check = validate_generated_url("https://documents/")

        assert check.valid is False
        assert check.error == "URL must start with podnet://"

    def test__malformed__is_invalid(self) -> None:
        """Structurally broken URLs fail."""
        check = validate_generated_url("podnet://[documents/")

        assert check.valid is False
        assert check.error is not None
        assert check.error.startswith("Invalid URL format")


def test__valid_apps__cover_every_mini_app() -> None:
    """Every app has a generator path."""
    assert {generate_app_url(app) for app in VALID_APPS} == {
        "podnet://documents/",
        "podnet://pod-collection/",
        "podnet://pod-editor/",
        "podnet://frogcrypto/",
    }
