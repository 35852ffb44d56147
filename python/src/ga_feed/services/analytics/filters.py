"""
Filter expression compiler.

Turns a human-written boolean filter such as::

    pageviews>100 && browser==Firefox

into the wire syntax expected by the report feed::

    ga%3Apageviews%3E100%3Bga%3Abrowser%3D%3DFirefox

The result is already URL-encoded. Compile a filter once; feeding a
compiled string back through the compiler is not supported.
"""

import logging
import re
from typing import Optional
from urllib.parse import quote_plus

logger = logging.getLogger(__name__)

NAMESPACE_PREFIX = "ga:"

# Two-character operators must come before their one-character prefixes
VALID_OPERATORS = r"(!~|=~|==|!=|>=|<=|=@|!@|>|<)"

_WHITESPACE_RE = re.compile(r"\s+")
_FIELD_RE = re.compile(
    r"(&&\s*|\|\|\s*|^)([a-z][a-z0-9]*)(\s*" + VALID_OPERATORS + r")",
    re.IGNORECASE,
)
_QUOTES_RE = re.compile(r"['\"]")
_AND_RE = re.compile(r"\s*&&\s*")
_OR_RE = re.compile(r"\s*\|\|\s*")
_OPERATOR_RE = re.compile(r"\s*" + VALID_OPERATORS + r"\s*")


class FilterExpressionCompiler:
    """Rewrites filter expressions into the feed's filters parameter."""

    def compile(self, raw: str) -> Optional[str]:
        """
        Compile a filter expression.

        Args:
            raw: Filter written with ``== != > < >= <= =~ !~ =@ !@``
                joined by ``&&`` / ``||``

        Returns:
            URL-encoded wire expression, or None when nothing is left to
            filter on (the parameter should then be omitted)
        """
        expression = self.rewrite(raw)
        if not expression:
            return None
        return quote_plus(expression, safe="")

    def rewrite(self, raw: str) -> str:
        """Apply every rewrite step except the final URL encoding."""
        expression = _WHITESPACE_RE.sub(" ", raw).strip()

        # Escape reserved characters before ',' and ';' gain a meaning
        expression = expression.replace(",", "\\,").replace(";", "\\;")

        expression = _FIELD_RE.sub(
            lambda m: f"{m.group(1)}{NAMESPACE_PREFIX}{m.group(2)}{m.group(3)}",
            expression,
        )

        expression = _QUOTES_RE.sub("", expression)

        expression = _AND_RE.sub(";", expression)
        expression = _OR_RE.sub(",", expression)
        expression = _OPERATOR_RE.sub(r"\1", expression)

        logger.debug(f"Rewrote filter {raw!r} to {expression!r}")
        return expression


_default_compiler = FilterExpressionCompiler()


def compile_filter(raw: str) -> Optional[str]:
    """Compile ``raw`` with a shared FilterExpressionCompiler."""
    return _default_compiler.compile(raw)
