"""Load-time inlining of ``{{include:path}}`` directives."""

import logging
import re
from pathlib import Path
from typing import Callable, Optional, Tuple

from .exceptions import ViewNotFoundError

logger = logging.getLogger(__name__)

INCLUDE = re.compile(r"\{\{include:(.*?)\}\}")


class IncludeResolver:
    """Expands include directives recursively, before any data is applied.

    Relative paths (``./x``, ``../x``) resolve against the including file's
    directory; other names go through ``resolve_view_path``. Missing files,
    unreadable files and recursive includes become HTML comments so the rest
    of the view still renders.
    """

    def __init__(
        self,
        resolve_view_path: Callable[[str], Path],
        default_extension: str = ".html",
        max_depth: int = 32,
        log: Optional[logging.Logger] = None,
    ):
        self.resolve_view_path = resolve_view_path
        self.default_extension = default_extension
        self.max_depth = max_depth
        self.log = log or logger

    def include_path(self, name: str, current_dir: Path) -> Path:
        """Resolve the file an include directive refers to."""
        if name.startswith(("./", "../")):
            path = (current_dir / name).resolve()
            if not path.suffix:
                path = path.with_name(path.name + self.default_extension)
            return path
        return self.resolve_view_path(name)

    def expand(self, content: str, current_dir: Path, stack: Tuple[str, ...] = ()) -> str:
        """Inline every include in ``content``.

        Args:
            content: Template text
            current_dir: Directory of the file ``content`` came from
            stack: Resolved paths of the files currently being expanded

        Returns:
            Content with no remaining include directives
        """
        return INCLUDE.sub(lambda match: self._inline(match.group(1).strip(), current_dir, stack), content)

    def _inline(self, name: str, current_dir: Path, stack: Tuple[str, ...]) -> str:
        try:
            path = self.include_path(name, current_dir)
        except ViewNotFoundError:
            self.log.warning("Include file not found: %s", name)
            return f"<!-- Include file not found: {name} -->"
        key = str(path)

        if key in stack or len(stack) >= self.max_depth:
            self.log.warning("Recursive include skipped: %s", key)
            return f"<!-- Recursive include skipped: {name} -->"

        if not path.is_file():
            self.log.warning("Include file not found: %s", key)
            return f"<!-- Include file not found: {name} -->"

        try:
            included = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.log.error("Error processing include %s: %s", name, e)
            return f"<!-- Error processing include: {name} -->"

        return self.expand(included, path.parent, stack + (key,))
