from __future__ import annotations

from types import SimpleNamespace
from urllib.parse import quote

import pytest

import blockstring.processor as processor_module
from blockstring import (
    BlockTagProcessor,
    ProcessorConfigError,
    TagProcessor,
    TaggedTemplate,
    TemplateLiterals,
    TemplateShapeError,
    block_string,
    make_block_tag_processor,
    make_tag_processor,
    map_values,
    raw_block_string,
)


def test_tag_processor_interleaves_by_default():
    process = make_tag_processor()
    assert isinstance(process, TagProcessor)
    assert process(["a", "b", "c"], 1, 2) == "a1b2c"


@pytest.mark.parametrize(
    "literals",
    ["plain text", ["plain text"], ["  indented\n    text\n"]],
)
def test_tag_processor_round_trips_literals_without_values(literals):
    expected = literals if isinstance(literals, str) else "".join(literals)
    assert make_tag_processor()(literals) == expected


def test_tag_processor_calls_tag_function_once_per_segment():
    calls = []

    def tag(index, literals, values):
        calls.append((index, tuple(literals), tuple(values)))
        return f"[{index}]"

    process = make_tag_processor(tag)
    assert process(["x", "y", "z"], "A", "B") == "[0][1][2]"
    assert calls == [
        (0, ("x", "y", "z"), ("A", "B")),
        (1, ("x", "y", "z"), ("A", "B")),
        (2, ("x", "y", "z"), ("A", "B")),
    ]


def test_tag_processor_with_value_mapping():
    encode = make_tag_processor(map_values(quote))
    assert encode(["<span>", "</span>"], "hi there") == "<span>hi%20there</span>"


def test_tag_processor_post_processor():
    process = make_tag_processor(post_processor=len)
    assert process(["ab", "c"], "x") == 4


def test_tag_processor_rejects_mismatched_shapes():
    process = make_tag_processor()
    with pytest.raises(TemplateShapeError):
        process(["a", "b"])
    with pytest.raises(TemplateShapeError):
        process(["a"], 1)


def test_factories_validate_options():
    with pytest.raises(ProcessorConfigError):
        make_tag_processor("not callable")
    with pytest.raises(ProcessorConfigError):
        make_block_tag_processor(post_processor="not callable")


def test_tag_function_errors_propagate():
    def tag(index, literals, values):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        make_block_tag_processor(tag)("  a")


def test_block_string_trims_and_removes_leading_indents():
    assert block_string("\n    1\n    2\n      3\n    4\n  ") == "1\n2\n  3\n4"


def test_block_string_keeps_relative_indentation():
    assert block_string("    a\n  b\n      c") == "  a\nb\n    c"


def test_block_string_with_crlf_line_endings():
    assert block_string("\r\n  \r\n    a\r\n    b") == "\r\n\r\n  a\r\n  b"
    assert block_string("\r\n    a\r\n      b\r\n") == "\r\na\r\n  b\r"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("a\nb", "a\nb"),
        ("a\n  b\nc", "a\n  b\nc"),
        ("\nfirst\n  second\n", "first\n  second"),
        ("\nfirst\nlast\n   ", "first\nlast"),
    ],
)
def test_block_string_without_common_indent_only_trims_edges(text, expected):
    assert block_string(text) == expected


@pytest.mark.parametrize("text", ["", "\n", "\n\n"])
def test_block_string_passes_through_without_indentation(text):
    assert block_string(text) == text


def test_block_string_with_substitutions():
    result = block_string(["\n    name: ", "\n      value\n  "], "x")
    assert result == "name: x\n  value"


def test_block_string_substituted_values_are_not_dedented():
    result = block_string(["\n    items:\n", "\n  "], "    - a\n    - b")
    assert result == "items:\n    - a\n    - b"


def test_block_string_accepts_template_string_objects():
    template_string = SimpleNamespace(
        strings=("\n    hello ", "\n  "),
        interpolations=(SimpleNamespace(value="world"),),
    )
    assert block_string(template_string) == "hello world"


def test_block_processor_post_processor():
    shout = make_block_tag_processor(post_processor=str.upper)
    assert isinstance(shout, BlockTagProcessor)
    assert shout("  a\n  b") == "A\nB"


def test_block_processor_post_processor_may_return_any_type():
    lines = make_block_tag_processor(post_processor=lambda text: text.split("\n"))
    assert lines("\n    a\n    b\n  ") == ["a", "b"]


def test_block_processor_hands_dedented_literals_to_tag_function():
    seen = []

    def tag(index, literals, values):
        seen.append(literals)
        return literals.raw[index]

    process = make_block_tag_processor(tag)
    literals = TemplateLiterals.from_raw(["\n    a\\tb ", "\n      c\n  "])
    assert process(literals, "value") == "a\\tb \n  c"
    assert seen[0] is seen[1]
    assert seen[0].cooked == ("a\tb ", "\n  c")


def test_raw_and_cooked_forms_differ_only_in_escapes():
    literals = TemplateLiterals.from_raw(["\n    a\\tb\n      c\n  "])
    assert block_string(literals) == "a\tb\n  c"
    assert raw_block_string(literals) == "a\\tb\n  c"


def test_block_processor_dedents_once_per_invocation(monkeypatch: pytest.MonkeyPatch):
    calls = []
    original = processor_module.dedent_literals

    def counting(literals):
        calls.append(literals)
        return original(literals)

    monkeypatch.setattr(processor_module, "dedent_literals", counting)
    process = make_block_tag_processor()

    assert process(["\n    a ", " b ", " c\n  "], 1, 2) == "a 1 b 2 c"
    assert len(calls) == 1
    assert process(["\n      d\n  "]) == "d"
    assert len(calls) == 2


def test_block_processor_state_is_fresh_per_invocation():
    process = make_block_tag_processor()
    assert process("\n        deep\n          deeper\n  ") == "deep\n  deeper"
    assert process("\n  shallow\n    nested\n") == "shallow\n  nested"


def test_render_accepts_prebuilt_templates():
    template = TaggedTemplate.coerce(["\n    x = ", "\n  "], [1])
    assert block_string.render(template) == "x = 1"
    assert block_string(template) == "x = 1"
