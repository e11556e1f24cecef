"""HTTP server for previewing views while writing them."""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

from aiohttp import web

from .core.engine import ViewEngine
from .core.exceptions import ViewNotFoundError

logger = logging.getLogger(__name__)


class PreviewServer:
    """Serves rendered views over HTTP.

    ``GET /views/{name}`` renders with the query string as data and
    ``POST /views/{name}`` renders with a JSON body as data.
    """

    def __init__(self, engine: ViewEngine, host: str = "127.0.0.1", port: int = 8080):
        """Initialize preview server.

        Args:
            engine: Engine used for every request
            host: Interface to bind
            port: Port to listen on
        """
        self.engine = engine
        self.host = host
        self.port = port
        self.app = web.Application()
        self.runner: Optional[web.AppRunner] = None
        self.site: Optional[web.TCPSite] = None

        self.app.router.add_get('/health', self._health_check)
        self.app.router.add_get('/views', self._list_views)
        self.app.router.add_get('/views/{name}', self._render_query)
        self.app.router.add_post('/views/{name}', self._render_json)
        self.app.router.add_post('/cache/clear', self._clear_cache)

    async def start(self) -> None:
        """Start the preview server."""
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()
        self.site = web.TCPSite(self.runner, self.host, self.port)
        await self.site.start()
        logger.info("Preview server started on http://%s:%d", self.host, self.port)

    async def stop(self) -> None:
        """Stop the preview server."""
        if self.site:
            await self.site.stop()
        if self.runner:
            await self.runner.cleanup()

    async def serve_forever(self) -> None:
        await self.start()
        try:
            while True:
                await asyncio.sleep(3600)
        finally:
            await self.stop()

    def _render(self, name: str, data: Dict[str, Any]) -> web.Response:
        try:
            body = self.engine.render(name, data)
        except ViewNotFoundError as e:
            return web.json_response({"error": str(e)}, status=404)
        except Exception as e:
            logger.error("Error rendering view %s: %s", name, e)
            return web.json_response({"error": str(e)}, status=500)
        return web.Response(text=body, content_type="text/html", charset="utf-8")

    async def _render_query(self, request: web.Request) -> web.Response:
        return self._render(request.match_info['name'], dict(request.query))

    async def _render_json(self, request: web.Request) -> web.Response:
        try:
            data = await request.json()
        except json.JSONDecodeError:
            return web.json_response({"error": "Invalid JSON"}, status=400)
        if not isinstance(data, dict):
            return web.json_response({"error": "Render data must be a JSON object"}, status=400)
        return self._render(request.match_info['name'], data)

    async def _list_views(self, request: web.Request) -> web.Response:
        return web.json_response({"views": self.engine.list_views()})

    async def _clear_cache(self, request: web.Request) -> web.Response:
        self.engine.clear_cache()
        return web.json_response({"status": "cleared"})

    async def _health_check(self, request: web.Request) -> web.Response:
        return web.json_response({
            "status": "healthy",
            "views_path": str(self.engine.views_path),
            "cached_views": len(self.engine.cache),
        })
