"""View engine: loads views, expands includes and runs the render passes."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Union

from .cache import TemplateCache
from .conditionals import process_conditionals
from .exceptions import UnknownFilterError, UnknownHelperError, ViewNotFoundError
from .filters import BUILTIN_FILTERS
from .helpers import BUILTIN_HELPERS
from .includes import IncludeResolver
from .interpolation import Interpolator
from .iteration import ForeachEvaluator
from .models import EngineConfig, RenderOptions
from .registry import Registry
from .validator import validate_template

PRE_PROCESS_HOOK = "template_pre_process"
POST_PROCESS_HOOK = "template_post_process"

Options = Union[RenderOptions, Dict[str, Any], None]


class TemplateHooks(Protocol):
    """Filter hooks applied to the template text around the render passes."""

    def apply_filters(self, name: str, value: str, data: Mapping) -> str:
        ...


class ViewEngine:
    """Renders view files written in the ``{{ ... }}`` directive language.

    Rendering repeats three passes (loops, then conditionals, then
    variables/filters/helpers) until the text stops changing or
    ``config.max_passes`` is reached. If the cap is reached the partially
    rendered text is returned, which may still contain directives.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        logger: Optional[logging.Logger] = None,
        hooks: Optional[TemplateHooks] = None,
        **overrides: Any,
    ):
        """Initialize the engine.

        Args:
            config: Engine configuration. Defaults to EngineConfig()
            logger: Logger for render warnings. Defaults to this module's logger
            hooks: Optional hooks object with ``apply_filters``
            **overrides: EngineConfig fields overriding ``config``
        """
        if overrides:
            base = config.model_dump() if config is not None else {}
            config = EngineConfig(**{**base, **overrides})
        self.config = config or EngineConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.hooks = hooks

        self.views_path = self.config.views_path.resolve()
        self.views_path.mkdir(parents=True, exist_ok=True)

        self.cache = TemplateCache()
        self.filters = Registry("filter", UnknownFilterError, BUILTIN_FILTERS)
        self.helpers = Registry("helper", UnknownHelperError, BUILTIN_HELPERS)
        self.includes = IncludeResolver(
            self.get_view_path,
            self.config.default_extension,
            self.config.max_include_depth,
            self.logger,
        )

    def add_filter(self, name: str, func: Callable[..., Any]) -> None:
        """Register a filter; an existing filter with the same name is replaced."""
        self.filters.register(name, func)

    def add_helper(self, name: str, func: Callable[..., Any]) -> None:
        """Register a helper; an existing helper with the same name is replaced."""
        self.helpers.register(name, func)

    def apply_filter(self, value: Any, name: str, *args: Any) -> Any:
        """Apply one registered filter; unknown names follow the filter policy."""
        func = self.filters.lookup(name, self.config.unknown_filter_policy, self.logger)
        return func(value, *args) if func is not None else value

    def execute_helper(self, name: str, *args: Any) -> Any:
        """Call one registered helper; unknown names follow the helper policy."""
        func = self.helpers.lookup(name, self.config.unknown_helper_policy, self.logger)
        return func(*args) if func is not None else ""

    def get_view_path(self, view_name: str) -> Path:
        """Map a view name to its file.

        Dots separate directories (``user.profile`` is ``user/profile``) and
        the default extension is appended. Empty segments are dropped.

        Raises:
            ViewNotFoundError: If the name does not map to a file under the
                views directory
        """
        extension = self.config.default_extension
        name = view_name.strip()
        if extension and name.endswith(extension):
            name = name[:-len(extension)]
        segments = [segment for segment in name.split(".") if segment]
        if not segments:
            raise ViewNotFoundError(view_name)

        segments[-1] += extension
        path = self.views_path.joinpath(*segments).resolve()
        if not path.is_relative_to(self.views_path):
            raise ViewNotFoundError(view_name)
        return path

    def view_exists(self, view_name: str) -> bool:
        try:
            return self.get_view_path(view_name).is_file()
        except ViewNotFoundError:
            return False

    def list_views(self) -> List[str]:
        """Names of all views under the views directory, in dotted form."""
        extension = self.config.default_extension
        names = []
        for path in self.views_path.rglob(f"*{extension}"):
            if not path.is_file():
                continue
            relative = path.relative_to(self.views_path).as_posix()
            if extension:
                relative = relative[:-len(extension)]
            names.append(relative.replace("/", "."))
        return sorted(names)

    def clear_cache(self) -> None:
        self.cache.clear()

    def render(self, view_name: str, data: Optional[Mapping] = None, options: Options = None) -> str:
        """Render a view file.

        Args:
            view_name: View name, e.g. ``home`` or ``user.profile``
            data: Root render context
            options: RenderOptions or a dict of its fields

        Returns:
            Rendered text

        Raises:
            ViewNotFoundError: If the view file does not exist
        """
        opts = RenderOptions.coerce(options)
        view_path = self.get_view_path(view_name)
        if not view_path.is_file():
            raise ViewNotFoundError(str(view_path))

        use_cache = self.config.cache_enabled if opts.cache_enabled is None else opts.cache_enabled
        key = str(view_path)

        body = self.cache.get(key) if use_cache else None
        if body is None:
            body = self._load(view_name, view_path, opts)
            if use_cache:
                self.cache.set(key, body)
        else:
            self.logger.debug("Using cached view %s", key)

        return self.process_template(body, data or {}, opts)

    def render_string(self, template: str, data: Optional[Mapping] = None, options: Options = None) -> str:
        """Render template text directly. Includes are not expanded."""
        opts = RenderOptions.coerce(options)
        if opts.validate_syntax:
            self._report_syntax("<string>", template)
        return self.process_template(template, data or {}, opts)

    def process_template(self, template: str, data: Mapping, options: Options = None) -> str:
        """Run the render passes over ``template`` until it stops changing."""
        opts = RenderOptions.coerce(options)
        result = template

        if self.hooks is not None:
            result = self.hooks.apply_filters(PRE_PROCESS_HOOK, result, data)

        interpolate = Interpolator(self.filters, self.helpers, self.config, opts, self.logger)
        loops = ForeachEvaluator(
            interpolate,
            self.config.loop_max_passes,
            self.config.literal_fallback,
            self.logger,
        )

        for passes in range(1, self.config.max_passes + 1):
            previous = result
            result = loops.process(result, data)
            result = process_conditionals(result, data, self.config.literal_fallback)
            result = interpolate(result, data)
            if result == previous:
                self.logger.debug("Template stable after %d passes", passes)
                break
        else:
            self.logger.debug("Template still changing after %d passes", self.config.max_passes)

        if self.hooks is not None:
            result = self.hooks.apply_filters(POST_PROCESS_HOOK, result, data)

        return result

    def _load(self, view_name: str, view_path: Path, options: RenderOptions) -> str:
        content = view_path.read_text(encoding="utf-8")
        if options.validate_syntax:
            self._report_syntax(view_name, content)
        return self.includes.expand(content, view_path.parent, (str(view_path),))

    def _report_syntax(self, view_name: str, template: str) -> None:
        errors = validate_template(template)
        if errors:
            self.logger.warning("Syntax errors in view %s: %s", view_name, "; ".join(errors))
