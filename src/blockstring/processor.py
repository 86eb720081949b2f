"""Tag processors built from pluggable tag functions.

``make_tag_processor`` wraps a tag function into a callable that concatenates
one fragment per literal segment. ``make_block_tag_processor`` does the same
after stripping the common indentation of the literals, so indented
multi-line text can sit aligned with the surrounding code::

    text = block_string('''
        first line
          indented line
        last line
    ''')
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import partial
from typing import Any

from .config import ProcessorConfig, build_config
from .indentation import dedent_literals
from .literals import TaggedTemplate, TemplateLiterals
from .tags import TagFunction, raw_concatenate

__all__ = [
    "BlockTagProcessor",
    "TagProcessor",
    "block_string",
    "make_block_tag_processor",
    "make_tag_processor",
    "raw_block_string",
]


def _concatenate(step: TagFunction, template: TaggedTemplate) -> str:
    out = ""
    for index in range(len(template.literals)):
        out += step(index, template.literals, template.values)
    return out


@dataclass(slots=True)
class _DedentState:
    """Literals rewritten for one invocation of a block processor."""

    literals: TemplateLiterals | None = None


def _dedent_step(
    state: _DedentState,
    tag_function: TagFunction,
    index: int,
    literals: TemplateLiterals,
    values: Sequence[Any],
) -> str:
    if index == 0:
        state.literals = dedent_literals(literals)
    return tag_function(index, state.literals, values)


@dataclass(frozen=True, slots=True)
class TagProcessor:
    """Callable ``process(literals, *values)`` concatenating tag function fragments."""

    config: ProcessorConfig

    def __call__(self, literals: Any, *values: Any) -> Any:
        return self.render(TaggedTemplate.coerce(literals, values))

    def render(self, template: TaggedTemplate) -> Any:
        """Process an already validated :class:`TaggedTemplate`."""

        result = _concatenate(self.config.tag_function, template)
        return self.config.post_process(result)


@dataclass(frozen=True, slots=True)
class BlockTagProcessor(TagProcessor):
    """Tag processor that strips common indentation before delegating."""

    def render(self, template: TaggedTemplate) -> Any:
        state = _DedentState()
        step = partial(_dedent_step, state, self.config.tag_function)
        result = _concatenate(step, template)
        return self.config.post_process(result)


def make_tag_processor(
    tag_function: TagFunction | None = None,
    post_processor: Callable[[str], Any] | None = None,
) -> TagProcessor:
    """Wrap ``tag_function`` into a :class:`TagProcessor`.

    Parameters
    ----------
    tag_function:
        Called as ``tag_function(index, literals, values)`` for each literal
        segment. Defaults to plain interleaving of literals and values.
    post_processor:
        Optional callable applied to the concatenated string.
    """

    return TagProcessor(build_config(tag_function=tag_function, post_processor=post_processor))


def make_block_tag_processor(
    tag_function: TagFunction | None = None,
    post_processor: Callable[[str], Any] | None = None,
) -> BlockTagProcessor:
    """Like :func:`make_tag_processor`, but strip common indentation first.

    The shortest leading-space run across all lines is removed from every line
    of both the cooked and the raw literals. A leading newline and a trailing
    newline followed by spaces are trimmed as well.
    """

    return BlockTagProcessor(build_config(tag_function=tag_function, post_processor=post_processor))


block_string = make_block_tag_processor()
raw_block_string = make_block_tag_processor(raw_concatenate)
