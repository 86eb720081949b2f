"""Detect and strip the common indentation of block string literals."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from .literals import TemplateLiterals

__all__ = [
    "dedent_literals",
    "detect_indentation",
    "strip_indentation",
]


LOGGER = logging.getLogger(__name__)

# The closing delimiter usually sits on its own indented line.
_TRAILING_BLANK_LINE = re.compile(r"\n +\Z")
# Lines end at \n, \r, U+2028 or U+2029.
_LINE_START = r"(?:(?<=[\n\r\u2028\u2029])|\A)"
_LINE_END = r"(?=[\n\r\u2028\u2029]|\Z)"
# Leading spaces of lines with content, or lines made only of spaces.
# Empty lines never match.
_LEADING_SPACES = re.compile(rf"{_LINE_START}(?: *(?=\S)| +{_LINE_END})")
_LEADING_NEWLINE = re.compile(r"\A\n")
_TRAILING_SPACES = re.compile(r"\n *\Z")


def detect_indentation(text: str) -> str | None:
    """Return the shortest leading-space run among the lines of ``text``.

    A single trailing line made only of spaces is ignored. Other lines made
    only of spaces take part in the scan. Returns ``None`` when no line
    qualifies, and ``""`` when at least one line is not indented at all.
    """

    text = _TRAILING_BLANK_LINE.sub("", text)
    candidates = _LEADING_SPACES.findall(text)
    if not candidates:
        return None
    return min(candidates, key=len)


def strip_indentation(segments: Sequence[str], indentation: str) -> tuple[str, ...]:
    """Remove ``indentation`` from the start of every line of every segment.

    The first segment also loses one leading newline and the last segment a
    trailing newline followed by spaces.
    """

    prefix = re.compile(_LINE_START + re.escape(indentation))
    last = len(segments) - 1
    stripped = []
    for position, segment in enumerate(segments):
        segment = prefix.sub("", segment)
        if position == 0:
            segment = _LEADING_NEWLINE.sub("", segment)
        if position == last:
            segment = _TRAILING_SPACES.sub("", segment)
        stripped.append(segment)
    return tuple(stripped)


def dedent_literals(literals: TemplateLiterals) -> TemplateLiterals:
    """Strip the common indentation from both forms of ``literals``.

    The indentation is measured on the cooked form and removed identically
    from the raw form. ``literals`` is returned as-is when no indentation
    could be measured.
    """

    indentation = detect_indentation(literals.join())
    if indentation is None:
        LOGGER.debug(
            "No indented lines found in %d segment(s); leaving literals untouched",
            len(literals),
        )
        return literals

    LOGGER.debug(
        "Stripping %d column(s) of indentation from %d segment(s)",
        len(indentation),
        len(literals),
    )
    return literals.replace(
        cooked=strip_indentation(literals.cooked, indentation),
        raw=strip_indentation(literals.raw, indentation),
    )
