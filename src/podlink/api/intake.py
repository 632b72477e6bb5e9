"""Deep-link intake endpoint.

The host's URL-open mechanism (or a second application instance) posts
opened URLs here; they are handed to the running instance's event source.
"""

import logging

from aiohttp import web

from podlink.app_keys import source_key

logger = logging.getLogger(__name__)


def create_intake_routes() -> list[web.RouteDef]:
    return [
        web.post("/api/open", open_urls),
    ]


async def open_urls(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError:
        return web.json_response({"error": "Request body must be JSON"}, status=400)

    urls = _extract_urls(body)
    if urls is None:
        return web.json_response(
            {"error": 'Expected {"urls": [...]} or {"url": "..."}'},
            status=400,
        )

    source = request.app[source_key]
    accepted = source.deliver(urls)
    logger.debug(f"Accepted {accepted} deep-link URL(s)")
    return web.json_response({"accepted": accepted}, status=202)


def _extract_urls(body: object) -> list[str] | None:
    if not isinstance(body, dict):
        return None

    if "urls" in body:
        urls = body["urls"]
        if not isinstance(urls, list) or not all(isinstance(url, str) for url in urls):
            return None
        return urls

    url = body.get("url")
    if isinstance(url, str):
        return [url]
    return None
