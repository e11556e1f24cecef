"""Cache of include-expanded template bodies keyed by resolved file path."""

from typing import Dict, List, Optional


class TemplateCache:
    """Maps a view's resolved path to its body after include expansion.

    Bodies are stored before any data is substituted, so one entry serves
    every render of the view. Writers for the same path always store the same
    body for the same file content, so concurrent writes need no locking.
    """

    def __init__(self):
        self._bodies: Dict[str, str] = {}

    def get(self, path: str) -> Optional[str]:
        return self._bodies.get(path)

    def set(self, path: str, body: str) -> None:
        self._bodies[path] = body

    def clear(self) -> None:
        self._bodies.clear()

    def paths(self) -> List[str]:
        return list(self._bodies)

    def __contains__(self, path: object) -> bool:
        return path in self._bodies

    def __len__(self) -> int:
        return len(self._bodies)
