"""Application keys for type-safe app configuration access."""

from aiohttp import web

from podlink.core.generator import LocationProvider
from podlink.dispatch.manager import DeepLinkManager
from podlink.dispatch.sources import LocalUrlSource

source_key = web.AppKey("source", LocalUrlSource)
manager_key = web.AppKey("manager", DeepLinkManager)
location_key = web.AppKey("location", LocationProvider)
