"""View Engine - directive-based templates for MVC views."""

__version__ = "0.1.0"

from .controller import ViewController
from .core.engine import ViewEngine
from .core.exceptions import (
    ConfigError,
    UnknownFilterError,
    UnknownHelperError,
    ViewEngineError,
    ViewNotFoundError,
)
from .core.models import EngineConfig, RenderOptions, UnknownNamePolicy
from .core.validator import validate_template

__all__ = [
    "ConfigError",
    "EngineConfig",
    "RenderOptions",
    "UnknownFilterError",
    "UnknownHelperError",
    "UnknownNamePolicy",
    "ViewController",
    "ViewEngine",
    "ViewEngineError",
    "ViewNotFoundError",
    "validate_template",
]
