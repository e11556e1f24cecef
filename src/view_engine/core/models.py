"""Configuration and option models for the view engine."""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator


class UnknownNamePolicy(str, Enum):
    """What to do when a template names an unregistered filter or helper."""
    SILENT = "silent"
    WARN = "warn"
    STRICT = "strict"


class LogLevel(str, Enum):
    """Log levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class EngineConfig(BaseModel):
    """Configuration for a ViewEngine instance."""
    views_path: Path = Path("./views")
    default_extension: str = ".html"
    cache_enabled: bool = True
    max_passes: int = Field(default=10, ge=1)
    loop_max_passes: int = Field(default=5, ge=1)
    max_include_depth: int = Field(default=32, ge=1)
    unknown_filter_policy: UnknownNamePolicy = UnknownNamePolicy.SILENT
    unknown_helper_policy: UnknownNamePolicy = UnknownNamePolicy.SILENT
    literal_fallback: bool = True
    log_level: LogLevel = LogLevel.INFO

    @field_validator('default_extension')
    @classmethod
    def normalize_extension(cls, v: str) -> str:
        """Ensure the extension starts with a dot."""
        v = v.strip()
        if v and not v.startswith('.'):
            v = f".{v}"
        return v


class RenderOptions(BaseModel):
    """Per-call options for ``ViewEngine.render``."""
    cache_enabled: Optional[bool] = None  # None: use the engine setting
    validate_syntax: bool = True
    show_warnings: bool = True
    preserve_undefined: bool = True

    @classmethod
    def coerce(cls, options: Union['RenderOptions', Dict[str, Any], None]) -> 'RenderOptions':
        """Accept an options model, a plain dict, or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls(**options)
