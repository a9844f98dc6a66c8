import itertools

import pytest

import json_parser as jp

BLANK_RUNS = ["", " ", "\t", "\n", "\r\n", " \t \n "]

SAMPLES = [
    "null",
    "true",
    "-12.5e2",
    '"text with spaces"',
    "[]",
    "{}",
    '[1, {"a": [true, false, null]}, "x"]',
    '{"outer": {"inner": [1, 2, {"deep": "yes"}]}}',
]


def render(value):
    """Minimal-whitespace text for a tree, used to check reconstruction."""
    if isinstance(value, jp.Null):
        return "null"
    if isinstance(value, jp.Bool):
        return "true" if value.value else "false"
    if isinstance(value, jp.Number):
        return repr(value.value)
    if isinstance(value, jp.Str):
        return '"' + value.value + '"'
    if isinstance(value, jp.Array):
        return "[" + ",".join(render(v) for v in value.items) + "]"
    return "{" + ",".join(
        '"' + k + '":' + render(v) for k, v in value.members.items()
    ) + "}"


@pytest.mark.parametrize("text", SAMPLES)
@pytest.mark.parametrize("before, after", list(itertools.product(BLANK_RUNS[:3], BLANK_RUNS[3:])))
def test_surrounding_blanks_do_not_change_the_value(text, before, after):
    value, rest = jp.parse(before + text + after)
    assert value == jp.parse(text)[0]
    assert rest == ""


TREES = [
    jp.Null(),
    jp.Bool(False),
    jp.Number(3.25),
    jp.Number(-1e-7),
    jp.Str("k:v,[x]"),
    jp.Array([]),
    jp.Object({}),
    jp.Array([jp.Number(1.0), jp.Array([jp.Array([jp.Null()])]), jp.Str("")]),
    jp.Object({
        "list": jp.Array([jp.Bool(True), jp.Object({"n": jp.Number(0.0)})]),
        "name": jp.Str("tree"),
        "none": jp.Null(),
    }),
]


@pytest.mark.parametrize("tree", TREES)
def test_rendered_tree_parses_back_to_an_equal_tree(tree):
    assert jp.parse(render(tree)) == (tree, "")


def test_parses_are_independent_across_threads():
    from concurrent.futures import ThreadPoolExecutor

    texts = [render(t) for t in TREES] * 20
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda t: jp.parse(t)[0], texts))
    assert results == list(TREES) * 20
