"""``{{foreach:...}}`` / ``{{endforeach}}`` blocks."""

import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from .blocks import Block, block_pattern, find_blocks, replace_blocks
from .conditionals import process_conditionals
from .resolver import resolve
from .values import is_sequence, stringify, to_json

logger = logging.getLogger(__name__)

FOREACH_TOKENS = block_pattern(r"\{\{foreach:(?P<header>.*?)\}\}", "{{endforeach}}")
LOOP_SPEC = re.compile(r"^([\w.]+)\s+as\s+(\w+)\s*=>\s*(\w+)$")

DEFAULT_KEY_NAME = "index"
DEFAULT_VALUE_NAME = "item"

Interpolate = Callable[[str, Mapping], str]


def parse_loop_spec(spec: str) -> Tuple[str, str, str]:
    """Split ``items as key => value`` into its names.

    A bare ``items`` binds ``index`` and ``item``.
    """
    spec = spec.strip()
    match = LOOP_SPEC.match(spec)
    if match:
        return match.group(1), match.group(2), match.group(3)
    return spec, DEFAULT_KEY_NAME, DEFAULT_VALUE_NAME


def _placeholder(name: str) -> re.Pattern:
    return re.compile(r"\{\{\s*" + re.escape(name) + r"\s*\}\}")


def _substitute(body: str, name: str, text: str) -> str:
    return _placeholder(name).sub(lambda _: text, body)


def _bind(text: str, loop_context: Mapping, value_name: str, value: Any) -> str:
    # Fields of the bound value first, so "{{ item.name }}" is filled in
    # before anything else sees it.
    if isinstance(value, Mapping):
        for prop, prop_value in value.items():
            if isinstance(prop_value, Mapping) or is_sequence(prop_value):
                replacement = to_json(prop_value)
            else:
                replacement = stringify(prop_value)
            text = _substitute(text, f"{value_name}.{prop}", replacement)

    for binding, binding_value in loop_context.items():
        if not isinstance(binding_value, Mapping):
            text = _substitute(text, str(binding), stringify(binding_value))
    return text


def _outside_nested_loops(body: str, rewrite: Callable[[str], str]) -> str:
    """Apply ``rewrite`` to the text between the loop blocks in ``body``."""
    pieces = []
    position = 0
    for block in find_blocks(body, FOREACH_TOKENS):
        pieces.append(rewrite(body[position:block.start]))
        pieces.append(body[block.start:block.end])
        position = block.end
    pieces.append(rewrite(body[position:]))
    return "".join(pieces)


def _entries(target: Any) -> Iterable[Tuple[Any, Any]]:
    if isinstance(target, Mapping):
        return target.items()
    return enumerate(target)


class ForeachEvaluator:
    """Expands loop blocks, evaluating each iteration against its own context.

    Args:
        interpolate: Variable/filter/helper pass, called with a body and context
        max_passes: Passes run over each iteration body to settle nested directives
        literal_fallback: Passed through to the conditional pass
        log: Logger for warnings about non-iterable targets
    """

    def __init__(
        self,
        interpolate: Interpolate,
        max_passes: int = 5,
        literal_fallback: bool = True,
        log: Optional[logging.Logger] = None,
    ):
        self.interpolate = interpolate
        self.max_passes = max_passes
        self.literal_fallback = literal_fallback
        self.log = log or logger

    def process(self, template: str, context: Mapping) -> str:
        """Replace each outermost loop block with its expanded output."""
        return replace_blocks(template, FOREACH_TOKENS, lambda block: self._expand(block, context))

    def _expand(self, block: Block, context: Mapping) -> str:
        name, key_name, value_name = parse_loop_spec(block.header)
        target = resolve(name, context)
        if not isinstance(target, Mapping) and not is_sequence(target):
            self.log.warning("Variable '%s' is not an iterable sequence or mapping", name)
            return ""

        output = []
        for key, value in _entries(target):
            loop_context: Dict[str, Any] = dict(context)
            loop_context[key_name] = key
            loop_context[value_name] = value
            output.append(self._render_iteration(block.body, loop_context, value_name, value))
        return "".join(output)

    def _render_iteration(self, body: str, loop_context: Dict[str, Any], value_name: str, value: Any) -> str:
        # Nested loops bind their own names, so their bodies are left to them.
        body = _outside_nested_loops(body, lambda text: _bind(text, loop_context, value_name, value))

        for _ in range(self.max_passes):
            previous = body
            body = process_conditionals(body, loop_context, self.literal_fallback)
            body = self.process(body, loop_context)
            body = self.interpolate(body, loop_context)
            if body == previous:
                break
        return body
