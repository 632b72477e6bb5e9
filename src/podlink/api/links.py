"""Link utility endpoints.

Expose the parser, validator and generator over HTTP for tooling and for
UI code running outside the Python process.
"""


from aiohttp import web

from podlink.app_keys import location_key
from podlink.core.generator import (
    generate_app_url,
    generate_current_state_url,
    generate_documents_url,
)
from podlink.core.parser import parse_deep_link_url
from podlink.core.types import VALID_APPS, GenerateUrlOptions, MiniApp, route_from_dict
from podlink.core.validator import validate_deep_link_url


def create_links_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/links/parse", parse_link),
        web.get("/api/links/validate", validate_link),
        web.post("/api/links/generate", generate_link),
        web.get("/api/links/current", current_link),
    ]


async def parse_link(request: web.Request) -> web.Response:
    url = request.query.get("url")
    if url is None:
        return web.json_response({"error": "Missing url query parameter"}, status=400)
    return web.json_response(parse_deep_link_url(url).to_dict())


async def validate_link(request: web.Request) -> web.Response:
    url = request.query.get("url")
    if url is None:
        return web.json_response({"error": "Missing url query parameter"}, status=400)
    return web.json_response(validate_deep_link_url(url).to_dict())


async def generate_link(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError:
        return web.json_response({"error": "Request body must be JSON"}, status=400)

    if not isinstance(body, dict):
        return web.json_response({"error": "Request body must be an object"}, status=400)

    try:
        url = _generate_from_body(body)
    except ValueError as e:
        return web.json_response({"error": str(e)}, status=400)

    return web.json_response({"url": url})


def _generate_from_body(body: dict[str, object]) -> str:
    app_name = body.get("app")
    if app_name not in {app.value for app in VALID_APPS}:
        valid_apps = ", ".join(VALID_APPS)
        raise ValueError(f"Invalid app name: {app_name}. Valid apps: {valid_apps}")
    app = MiniApp(str(app_name))

    params = body.get("params", {})
    if not isinstance(params, dict) or not all(
        isinstance(key, str) and (value is None or isinstance(value, str))
        for key, value in params.items()
    ):
        raise ValueError("params must be an object of strings")

    include_scheme = body.get("include_scheme", True)
    if not isinstance(include_scheme, bool):
        raise ValueError("include_scheme must be a boolean")

    options = GenerateUrlOptions(include_scheme=include_scheme, params=params)
    route = body.get("route")
    if app is MiniApp.DOCUMENTS and route is not None:
        return generate_documents_url(route_from_dict(route), options)
    return generate_app_url(app, options)


async def current_link(request: web.Request) -> web.Response:
    location = request.app.get(location_key)
    return web.json_response({"url": generate_current_state_url(location)})
