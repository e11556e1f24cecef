"""Variable, filter and helper substitution: ``{{name|filter:args}}``."""

import logging
import re
from collections.abc import Mapping
from typing import Optional

from .arguments import split_quoted
from .filters import apply_filters
from .helpers import call_helper, match_helper_call
from .models import EngineConfig, RenderOptions
from .registry import Registry
from .resolver import resolve
from .values import UNDEFINED, stringify

logger = logging.getLogger(__name__)

VARIABLE = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")

# Block syntax is handled by the other passes and must survive this one.
DIRECTIVE = re.compile(r"^(?:if\s|else$|endif$|foreach:|endforeach$|include:)")


class Interpolator:
    """Replaces ``{{ ... }}`` expressions with their rendered values."""

    def __init__(
        self,
        filters: Registry,
        helpers: Registry,
        config: EngineConfig,
        options: RenderOptions,
        log: Optional[logging.Logger] = None,
    ):
        self.filters = filters
        self.helpers = helpers
        self.config = config
        self.options = options
        self.log = log or logger

    def __call__(self, template: str, context: Mapping) -> str:
        return VARIABLE.sub(lambda match: self._render(match, context), template)

    def _render(self, match: re.Match, context: Mapping) -> str:
        expression = match.group(1)
        if DIRECTIVE.match(expression):
            return match.group(0)

        parts = split_quoted(expression, "|") or [expression]
        head = parts[0]

        call = match_helper_call(head)
        if call:
            value = call_helper(
                call.group(1),
                call.group(2),
                context,
                self.helpers,
                self.config.unknown_helper_policy,
                self.log,
            )
        else:
            value = resolve(head, context)
            if value is UNDEFINED:
                if self.options.show_warnings:
                    self.log.warning("Undefined template variable: %s", head)
                return match.group(0) if self.options.preserve_undefined else ""

        value = apply_filters(value, parts[1:], self.filters, self.config.unknown_filter_policy, self.log)
        return stringify(value)
