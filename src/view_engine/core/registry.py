"""Per-engine registries for filters and helpers."""

import logging
from typing import Callable, Dict, Iterator, List, Optional, Type

from .models import UnknownNamePolicy

logger = logging.getLogger(__name__)


class Registry:
    """A named collection of callables.

    Each engine owns its own registries; registering a name that already
    exists replaces the previous callable.
    """

    def __init__(
        self,
        kind: str,
        error_class: Type[Exception],
        initial: Optional[Dict[str, Callable]] = None,
    ):
        self.kind = kind
        self.error_class = error_class
        self._entries: Dict[str, Callable] = dict(initial or {})

    def register(self, name: str, func: Callable) -> None:
        if not callable(func):
            raise TypeError(f"{self.kind} '{name}' must be callable")
        self._entries[name] = func

    def get(self, name: str) -> Optional[Callable]:
        return self._entries.get(name)

    def lookup(
        self,
        name: str,
        policy: UnknownNamePolicy = UnknownNamePolicy.SILENT,
        log: Optional[logging.Logger] = None,
    ) -> Optional[Callable]:
        """Get a callable, applying ``policy`` when the name is unknown.

        Returns None for unknown names under the silent and warn policies;
        raises ``error_class`` under the strict policy.
        """
        func = self._entries.get(name)
        if func is not None:
            return func
        if policy == UnknownNamePolicy.STRICT:
            raise self.error_class(name)
        if policy == UnknownNamePolicy.WARN:
            (log or logger).warning("Unknown %s: %s", self.kind, name)
        return None

    def names(self) -> List[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
