"""Static syntax checks for templates.

The checks only count block tokens; they report problems but never stop a
render.
"""

import re
from typing import List

IF_OPEN = re.compile(r"\{\{if\s+.*?\}\}")
IF_CLOSE = re.compile(r"\{\{endif\}\}")
FOREACH_OPEN = re.compile(r"\{\{foreach:.*?\}\}")
FOREACH_CLOSE = re.compile(r"\{\{endforeach\}\}")
UNTERMINATED = re.compile(r"\{\{[^}]*$")


def validate_template(template: str) -> List[str]:
    """Return a list of syntax problems found in ``template``."""
    errors: List[str] = []

    opens, closes = len(IF_OPEN.findall(template)), len(IF_CLOSE.findall(template))
    if opens != closes:
        errors.append(f"Unbalanced {{{{if}}}}/{{{{endif}}}} blocks: {opens} opened, {closes} closed")

    opens, closes = len(FOREACH_OPEN.findall(template)), len(FOREACH_CLOSE.findall(template))
    if opens != closes:
        errors.append(
            f"Unbalanced {{{{foreach}}}}/{{{{endforeach}}}} blocks: {opens} opened, {closes} closed"
        )

    malformed = UNTERMINATED.findall(template)
    if malformed:
        errors.append(f"Malformed variables: {', '.join(malformed)}")

    return errors
