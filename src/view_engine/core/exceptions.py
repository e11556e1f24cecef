"""Exceptions raised by the view engine."""


class ViewEngineError(Exception):
    """Base class for view engine errors."""


class ViewNotFoundError(ViewEngineError, FileNotFoundError):
    """Raised when a requested view file does not exist."""

    def __init__(self, view_path: str):
        self.view_path = view_path
        super().__init__(f"View not found: {view_path}")


class UnknownFilterError(ViewEngineError):
    """Raised for an unregistered filter under the strict policy."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown filter: {name}")


class UnknownHelperError(ViewEngineError):
    """Raised for an unregistered helper under the strict policy."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown helper: {name}")


class ConfigError(ViewEngineError, ValueError):
    """Raised when an engine configuration file is invalid."""
