"""Controller base class that renders views into aiohttp responses."""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from aiohttp import web

from .core.engine import Options, ViewEngine
from .core.models import EngineConfig

logger = logging.getLogger(__name__)


class ViewController:
    """Base for controllers that render views.

    Values set with ``set`` are shared by every view the controller renders;
    data passed to ``view``/``render`` is merged on top for that call only.
    """

    def __init__(self, engine: Optional[ViewEngine] = None, config: Optional[EngineConfig] = None):
        """Initialize controller.

        Args:
            engine: Engine to render with. One is created from ``config`` if omitted
            config: Engine configuration used when no engine is given
        """
        self.view_engine = engine or ViewEngine(config)
        self.view_data: Dict[str, Any] = {}

    def set(self, key: Union[str, Mapping], value: Any = None) -> None:
        """Set one view variable, or merge a mapping of them."""
        if isinstance(key, Mapping):
            self.view_data.update(key)
        else:
            self.view_data[key] = value

    def clear_view_data(self) -> None:
        self.view_data = {}

    def view(self, view_name: str, extra: Optional[Mapping] = None, options: Options = None) -> str:
        """Render a view with the controller data plus ``extra``."""
        data = {**self.view_data, **(extra or {})}
        return self.view_engine.render(view_name, data, options)

    def partial(self, view_name: str, extra: Optional[Mapping] = None) -> str:
        return self.view(view_name, extra)

    def render(self, view_name: str, extra: Optional[Mapping] = None, options: Options = None) -> web.Response:
        """Render a view into an HTML response.

        Any error while rendering produces a 500 plain text response.
        """
        try:
            body = self.view(view_name, extra, options)
        except Exception as e:
            logger.error("Error rendering view %s: %s", view_name, e)
            return web.Response(
                text="Internal Server Error",
                status=500,
                content_type="text/plain",
                charset="utf-8",
            )
        return web.Response(text=body, content_type="text/html", charset="utf-8")

    def json(self, data: Any, status: int = 200) -> web.Response:
        return web.json_response(data, status=status)

    def redirect(self, url: str) -> web.Response:
        return web.Response(status=302, headers={"Location": url})
