"""Balanced block matching for ``if`` and ``foreach`` directives."""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern


@dataclass(frozen=True)
class Block:
    """One outermost block found in a template."""
    start: int
    end: int
    header: str
    body: str
    alternative: Optional[str] = None


def block_pattern(opener: str, closer: str, separator: Optional[str] = None) -> Pattern:
    """Build a token pattern from an opener regex with a ``header`` group."""
    parts = [f"(?P<open>{opener})", f"(?P<close>{re.escape(closer)})"]
    if separator:
        parts.append(f"(?P<sep>{re.escape(separator)})")
    return re.compile("|".join(parts), re.DOTALL)


def find_blocks(template: str, tokens: Pattern) -> List[Block]:
    """Find the outermost balanced blocks in ``template``.

    Nested blocks are kept intact inside the body. A separator (``else``)
    only splits the block it belongs to, i.e. at nesting depth one. Openers
    without a matching closer are left alone and scanning continues after
    them.
    """
    matches = list(tokens.finditer(template))
    blocks: List[Block] = []
    i = 0
    while i < len(matches):
        opening = matches[i]
        if opening.lastgroup != "open":
            i += 1
            continue

        depth = 1
        separator = None
        j = i + 1
        while j < len(matches):
            kind = matches[j].lastgroup
            if kind == "open":
                depth += 1
            elif kind == "close":
                depth -= 1
                if depth == 0:
                    break
            elif kind == "sep" and depth == 1 and separator is None:
                separator = matches[j]
            j += 1

        if j == len(matches):
            i += 1
            continue

        closing = matches[j]
        if separator is not None:
            body = template[opening.end():separator.start()]
            alternative = template[separator.end():closing.start()]
        else:
            body = template[opening.end():closing.start()]
            alternative = None
        blocks.append(Block(
            start=opening.start(),
            end=closing.end(),
            header=opening.group("header"),
            body=body,
            alternative=alternative,
        ))
        i = j + 1
    return blocks


def replace_blocks(template: str, tokens: Pattern, render: Callable[[Block], str]) -> str:
    """Replace each outermost block with ``render(block)``."""
    blocks = find_blocks(template, tokens)
    if not blocks:
        return template
    pieces: List[str] = []
    position = 0
    for block in blocks:
        pieces.append(template[position:block.start])
        pieces.append(render(block))
        position = block.end
    pieces.append(template[position:])
    return "".join(pieces)
