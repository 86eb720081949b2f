"""Literal segment sequences and tagged template invocations."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, overload

from .errors import TemplateShapeError

__all__ = [
    "TaggedTemplate",
    "TemplateLiterals",
    "cook",
]


_ESCAPE_PATTERN = re.compile(
    r"\\(?:"
    r"x(?P<hex>[0-9a-fA-F]{2})"
    r"|u(?P<short>[0-9a-fA-F]{4})"
    r"|U(?P<long>[0-9a-fA-F]{8})"
    r"|N\{(?P<name>[^}]+)\}"
    r"|(?P<octal>[0-7]{1,3})"
    r"|(?P<char>.))",
    re.DOTALL,
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "a": "\a",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "\n": "",
}


def cook(text: str) -> str:
    """Resolve backslash escapes in ``text`` the way a Python string literal does.

    Unknown escapes such as ``\\q`` and unknown ``\\N{...}`` names keep their
    backslash, and a trailing lone backslash is left untouched.
    """

    def substitute(match: re.Match[str]) -> str:
        code = match.group("hex") or match.group("short") or match.group("long")
        if code is not None:
            return chr(int(code, 16))
        if match.group("octal") is not None:
            return chr(int(match.group("octal"), 8))
        if match.group("name") is not None:
            try:
                return unicodedata.lookup(match.group("name"))
            except KeyError:
                return match.group(0)
        char = match.group("char")
        return _SIMPLE_ESCAPES.get(char, match.group(0))

    return _ESCAPE_PATTERN.sub(substitute, text)


def _as_segments(segments: Iterable[str], label: str) -> tuple[str, ...]:
    if isinstance(segments, str):
        raise TemplateShapeError(f"{label} segments must be a sequence of strings, not a string")
    result = tuple(segments)
    for position, segment in enumerate(result):
        if not isinstance(segment, str):
            raise TemplateShapeError(
                f"{label} segment {position} is {type(segment).__name__}, expected str"
            )
    return result


@dataclass(frozen=True, slots=True)
class TemplateLiterals(Sequence[str]):
    """Cooked literal segments with their raw counterparts attached.

    Indexing, iteration and ``len`` operate on the cooked form; the raw form
    is available through :attr:`raw`.
    """

    cooked: tuple[str, ...]
    raw: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.cooked) != len(self.raw):
            raise TemplateShapeError(
                f"cooked and raw forms differ in length ({len(self.cooked)} != {len(self.raw)})"
            )

    @classmethod
    def from_cooked(
        cls,
        segments: Iterable[str],
        *,
        raw: Iterable[str] | None = None,
    ) -> "TemplateLiterals":
        """Build literals from cooked ``segments``; ``raw`` defaults to the same text."""

        cooked = _as_segments(segments, "cooked")
        raw_segments = cooked if raw is None else _as_segments(raw, "raw")
        return cls(cooked=cooked, raw=raw_segments)

    @classmethod
    def from_raw(cls, segments: Iterable[str]) -> "TemplateLiterals":
        """Build literals from raw ``segments``, resolving escapes with :func:`cook`."""

        raw = _as_segments(segments, "raw")
        return cls(cooked=tuple(cook(segment) for segment in raw), raw=raw)

    def replace(self, cooked: Iterable[str], raw: Iterable[str]) -> "TemplateLiterals":
        """Return a modified copy; ``self`` is left untouched."""

        return TemplateLiterals(
            cooked=_as_segments(cooked, "cooked"),
            raw=_as_segments(raw, "raw"),
        )

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[str, ...]: ...

    def __getitem__(self, index):
        return self.cooked[index]

    def __len__(self) -> int:
        return len(self.cooked)

    def __iter__(self) -> Iterator[str]:
        return iter(self.cooked)

    def join(self) -> str:
        return "".join(self.cooked)


def _is_template_string(candidate: Any) -> bool:
    # string.templatelib.Template (PEP 750) exposes these two attributes.
    return hasattr(candidate, "strings") and hasattr(candidate, "interpolations")


@dataclass(frozen=True, slots=True)
class TaggedTemplate:
    """A single tagged template invocation: literal segments plus substitution values."""

    literals: TemplateLiterals
    values: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if len(self.literals) != len(self.values) + 1:
            raise TemplateShapeError(
                "expected exactly one more literal segment than substitution values "
                f"(got {len(self.literals)} segments and {len(self.values)} values)"
            )

    @classmethod
    def coerce(cls, literals: Any, values: Iterable[Any] = ()) -> "TaggedTemplate":
        """Build a :class:`TaggedTemplate` from any supported call shape.

        Parameters
        ----------
        literals:
            A :class:`TemplateLiterals`, a single ``str``, a sequence of
            strings (optionally carrying a ``raw`` attribute) or a PEP 750
            template string object.
        values:
            Substitution values interleaved between the segments. Template
            string objects carry their own values, so none may be passed
            alongside them.
        """

        values = tuple(values)
        if isinstance(literals, TaggedTemplate):
            if values:
                raise TemplateShapeError("a TaggedTemplate already carries its values")
            return literals
        if isinstance(literals, TemplateLiterals):
            return cls(literals, values)
        if isinstance(literals, str):
            return cls(TemplateLiterals.from_cooked((literals,)), values)
        if _is_template_string(literals):
            if values:
                raise TemplateShapeError("template string objects carry their own values")
            return cls(
                TemplateLiterals.from_cooked(literals.strings),
                tuple(interpolation.value for interpolation in literals.interpolations),
            )
        if isinstance(literals, Sequence):
            raw = getattr(literals, "raw", None)
            return cls(TemplateLiterals.from_cooked(literals, raw=raw), values)
        raise TemplateShapeError(f"unsupported literal container: {type(literals).__name__}")
