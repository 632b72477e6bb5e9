"""Route model, parser, validator and generator for podnet:// URLs."""

from .generator import (
    CommonUrls,
    generate_app_url,
    generate_current_state_url,
    generate_documents_url,
    generate_route_url,
    generate_shareable_url,
    validate_generated_url,
)
from .parser import create_fallback_deep_link, is_valid_deep_link_url, parse_deep_link_url
from .validator import (
    default_route_for,
    get_safe_deep_link_data,
    is_navigable_deep_link,
    validate_deep_link_url,
)

__all__ = [
    "CommonUrls",
    "create_fallback_deep_link",
    "default_route_for",
    "generate_app_url",
    "generate_current_state_url",
    "generate_documents_url",
    "generate_route_url",
    "generate_shareable_url",
    "get_safe_deep_link_data",
    "is_navigable_deep_link",
    "is_valid_deep_link_url",
    "parse_deep_link_url",
    "validate_deep_link_url",
    "validate_generated_url",
]
