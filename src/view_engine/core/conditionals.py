"""``{{if}}`` / ``{{else}}`` / ``{{endif}}`` blocks."""

from collections.abc import Mapping
from typing import Any

from .arguments import unquote
from .blocks import Block, block_pattern, replace_blocks
from .resolver import resolve
from .values import UNDEFINED, is_truthy, loose_equals, strict_equals

IF_TOKENS = block_pattern(r"\{\{if\s+(?P<header>.*?)\}\}", "{{endif}}", "{{else}}")

# Checked in this order: "===" before "==" and "!==" before "!=".
COMPARISONS = (
    ("===", strict_equals, False),
    ("!==", strict_equals, True),
    ("==", loose_equals, False),
    ("!=", loose_equals, True),
)


def _operand(text: str, context: Mapping, literal_fallback: bool) -> Any:
    text = text.strip()
    value = resolve(text, context)
    if value is UNDEFINED and literal_fallback:
        return unquote(text)
    return value


def evaluate_condition(condition: str, context: Mapping, literal_fallback: bool = True) -> bool:
    """Evaluate the condition of an ``{{if}}`` directive.

    Supported forms are ``!name``, ``a === b``, ``a !== b``, ``a == b``,
    ``a != b`` and a bare ``name``. Each side of a comparison is looked up
    as a variable first; with ``literal_fallback`` an unresolved side is
    compared as the literal text instead, so ``status == active`` works
    whether or not ``active`` is a variable.
    """
    condition = condition.strip()

    if condition.startswith("!") and not condition.startswith("!="):
        return not is_truthy(resolve(condition[1:].strip(), context))

    for operator, compare, negate in COMPARISONS:
        if operator in condition:
            left, right = condition.split(operator, 1)
            result = compare(
                _operand(left, context, literal_fallback),
                _operand(right, context, literal_fallback),
            )
            return not result if negate else result

    return is_truthy(resolve(condition, context))


def process_conditionals(template: str, context: Mapping, literal_fallback: bool = True) -> str:
    """Replace each outermost ``{{if}}`` block with its chosen branch.

    The chosen branch is returned as is; blocks nested in it are evaluated on
    a later pass.
    """
    def choose(block: Block) -> str:
        if evaluate_condition(block.header, context, literal_fallback):
            return block.body
        return block.alternative or ""

    return replace_blocks(template, IF_TOKENS, choose)
