"""Tag functions that turn one literal segment into an output fragment.

A tag function receives ``(index, literals, values)`` and returns the fragment
for segment ``index``. The processors call it once per literal segment and
concatenate the fragments in order.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .literals import TemplateLiterals

__all__ = [
    "TagFunction",
    "default_concatenate",
    "map_values",
    "raw_concatenate",
]


TagFunction = Callable[[int, TemplateLiterals, Sequence[Any]], str]


def default_concatenate(index: int, literals: TemplateLiterals, values: Sequence[Any]) -> str:
    """Interleave cooked literals and values like an untagged template would."""

    if index < len(values):
        return literals[index] + str(values[index])
    return literals[index]


def raw_concatenate(index: int, literals: TemplateLiterals, values: Sequence[Any]) -> str:
    """Interleave the raw literal form with values, leaving escapes unresolved."""

    if index < len(values):
        return literals.raw[index] + str(values[index])
    return literals.raw[index]


def map_values(transform: Callable[[Any], Any], *, raw: bool = False) -> TagFunction:
    """Return a tag function that interleaves ``transform(value)`` instead of ``value``.

    Useful for escaping substitutions while keeping the literal text as written,
    e.g. ``map_values(urllib.parse.quote)``.
    """

    if not callable(transform):
        raise TypeError("transform must be callable")

    def tag(index: int, literals: TemplateLiterals, values: Sequence[Any]) -> str:
        text = literals.raw[index] if raw else literals[index]
        if index < len(values):
            return text + str(transform(values[index]))
        return text

    return tag
