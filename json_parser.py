# json_parser.py
# Hand-rolled recursive-descent parser for a simplified JSON dialect
#
# =============================================================================
#  PARSER IMPLEMENTATION: SCANNERLESS RECURSIVE DESCENT
# =============================================================================
#
# There is no token stream here. Every grammar rule reads straight from the
# input text at an absolute position and hands back (result, end_position).
# Rules map one-to-one onto the grammar:
#
#   value  := blank* ( object | array | number | string | bool | null ) blank*
#   object := '{' ( pair ( ',' pair )* )? '}'
#   pair   := blank* string blank* ':' blank* value blank*
#   array  := '[' ( blank* value blank* ( ',' blank* value blank* )* )? ']'
#   string := '"' [^"]* '"'
#   number := [+-]? ( digits ( '.' digits? )? | '.' digits ) exponent?
#   bool   := 'true' | 'false'
#   null   := 'null'
#
# The dialect is intentionally loose: strings are not unescaped (an escaped
# quote ends the string), and numbers follow the generic float lexical form
# rather than RFC 8259.
#
# Failures raise ParseError. Composite rules tag escaping errors with their
# own name, so a failure carries a short innermost-first stack of contexts,
# e.g. "string < object < parse".
#
# =============================================================================

import argparse
import pprint
import re
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
BLANKS = " \t\n\r"

MISMATCH   = "mismatch"
INCOMPLETE = "incomplete"

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?P<exp>[eE][+-]?\d+)?")
_NUMBER_START = frozenset("+-.0123456789")

# ---------------------------------------------------------------------------
# TREE DATA MODEL
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Str:
    value: str


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class Null:
    pass


@dataclass(frozen=True)
class Object:
    """
    JSON object. Members are wrapped in a read-only mapping on construction,
    so the tree cannot be changed after a parse hands it out.

    Objects are not hashable, and neither is any Array that contains one.
    """
    members: Mapping[str, "JsonValue"] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self):
        object.__setattr__(self, "members", MappingProxyType(dict(self.members)))


@dataclass(frozen=True)
class Array:
    items: Tuple["JsonValue", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


JsonValue = Union[Number, Str, Bool, Null, Object, Array]

# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class ParseError(SyntaxError):
    """
    Grammar failure at a given offset.

    `context` lists the rules the failure escaped through, innermost first.
    `kind` is INCOMPLETE when the input ran out, MISMATCH otherwise.
    """

    def __init__(self, reason: str, position: int, kind: str = MISMATCH):
        super().__init__(reason)
        self.reason = reason
        self.position = position
        self.kind = kind
        self.context: List[str] = []

    @property
    def rule(self) -> Optional[str]:
        return self.context[0] if self.context else None

    def __str__(self):
        msg = f"{self.reason} at offset {self.position}"
        if self.context:
            msg += f" (in {' < '.join(self.context)})"
        return msg


def _fail(text: str, pos: int, expected: str) -> ParseError:
    if pos >= len(text):
        return ParseError(f"unexpected end of input - expected {expected}", pos, INCOMPLETE)
    return ParseError(f"unexpected {text[pos]!r} - expected {expected}", pos)


@contextmanager
def _context(rule: str) -> Iterator[None]:
    try:
        yield
    except ParseError as exc:
        exc.context.append(rule)
        raise

# ---------------------------------------------------------------------------
# SCANNING HELPERS
# ---------------------------------------------------------------------------
def _skip_blanks(text: str, pos: int) -> int:
    n = len(text)
    while pos < n and text[pos] in BLANKS:
        pos += 1
    return pos


def _expect(text: str, pos: int, literal: str) -> int:
    """Match `literal` exactly at `pos` and return the position after it."""
    if not text.startswith(literal, pos):
        raise _fail(text, pos, repr(literal))
    return pos + len(literal)

# ---------------------------------------------------------------------------
# LEAF RULES
# ---------------------------------------------------------------------------
def parse_null(text: str, pos: int = 0) -> Tuple[Null, int]:
    return Null(), _expect(text, pos, "null")


def parse_bool(text: str, pos: int = 0) -> Tuple[bool, int]:
    if text.startswith("true", pos):
        return True, pos + 4
    if text.startswith("false", pos):
        return False, pos + 5
    raise _fail(text, pos, "'true' or 'false'")


def parse_string(text: str, pos: int = 0) -> Tuple[str, int]:
    """
    Parse a double-quoted string and return its raw contents.

    Nothing between the quotes is interpreted: backslashes are kept as-is and
    the first '"' after the opening one always closes the string.
    """
    with _context("string"):
        start = _expect(text, pos, '"')
        end = text.find('"', start)
        if end < 0:
            raise ParseError("unterminated string", len(text), INCOMPLETE)
        return text[start:end], end + 1


def parse_number(text: str, pos: int = 0) -> Tuple[float, int]:
    m = _NUMBER_RE.match(text, pos)
    if m is None:
        raise _fail(text, pos, "number")
    end = m.end()
    # A bare exponent marker must be followed by digits; "1e" is not "1" + "e".
    if m.group("exp") is None and end < len(text) and text[end] in "eE":
        raise _fail(text, _skip_sign(text, end + 1), "exponent digits")
    return float(m.group()), end


def _skip_sign(text: str, pos: int) -> int:
    if pos < len(text) and text[pos] in "+-":
        return pos + 1
    return pos

# ---------------------------------------------------------------------------
# COMPOSITE RULES
# ---------------------------------------------------------------------------
def parse_array(text: str, pos: int = 0) -> Tuple[Tuple[JsonValue, ...], int]:
    """
    Parse '[' value (',' value)* ']'.

    A comma always commits to another element, so "[1,]" fails on the ']'
    rather than being read as a one-element array.
    """
    with _context("array"):
        pos = _expect(text, pos, "[")
        items: List[JsonValue] = []
        if text.startswith("]", pos):
            return (), pos + 1
        while True:
            value, pos = parse_value(text, pos)
            items.append(value)
            if text.startswith(",", pos):
                pos += 1
                continue
            pos = _expect(text, pos, "]")
            return tuple(items), pos


def _parse_pair(text: str, pos: int) -> Tuple[str, JsonValue, int]:
    key, pos = parse_string(text, _skip_blanks(text, pos))
    pos = _expect(text, _skip_blanks(text, pos), ":")
    value, pos = parse_value(text, pos)
    return key, value, pos


def parse_object(text: str, pos: int = 0) -> Tuple[Dict[str, JsonValue], int]:
    """
    Parse '{' pair (',' pair)* '}' into a dict.

    Duplicate keys are not an error; the last occurrence wins.
    """
    with _context("object"):
        pos = _expect(text, pos, "{")
        members: Dict[str, JsonValue] = {}
        if text.startswith("}", pos):
            return members, pos + 1
        while True:
            key, value, pos = _parse_pair(text, pos)
            members[key] = value
            if text.startswith(",", pos):
                pos += 1
                continue
            pos = _expect(text, pos, "}")
            return members, pos

# ---------------------------------------------------------------------------
# CORE VALUE PARSER
# ---------------------------------------------------------------------------
def parse_value(text: str, pos: int = 0) -> Tuple[JsonValue, int]:
    """
    Parse one value surrounded by optional blanks.

    Alternatives are chosen on the first significant character, in the
    order object, array, number, string, boolean, null. The grammars are
    disjoint on that character, so at most one rule is ever attempted.
    """
    pos = _skip_blanks(text, pos)
    ch = text[pos] if pos < len(text) else ""

    if ch == "{":
        members, pos = parse_object(text, pos)
        value: JsonValue = Object(members)
    elif ch == "[":
        items, pos = parse_array(text, pos)
        value = Array(items)
    elif ch and ch in _NUMBER_START:
        number, pos = parse_number(text, pos)
        value = Number(number)
    elif ch == '"':
        s, pos = parse_string(text, pos)
        value = Str(s)
    elif ch in ("t", "f"):
        b, pos = parse_bool(text, pos)
        value = Bool(b)
    elif ch == "n":
        value, pos = parse_null(text, pos)
    else:
        raise _fail(text, pos, "value")

    return value, _skip_blanks(text, pos)

# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(text: str) -> Tuple[JsonValue, str]:
    """
    Parse the value at the start of `text`.

    Returns the tree and whatever input is left after the value and its
    trailing blanks. Leftover input is not an error here; see parse_all.
    """
    with _context("parse"):
        value, pos = parse_value(text, 0)
    return value, text[pos:]


def parse_all(text: str) -> JsonValue:
    """Parse `text` and reject anything left over after the root value."""
    with _context("parse"):
        value, pos = parse_value(text, 0)
        if pos != len(text):
            raise ParseError("extra data after root value", pos)
    return value

# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _cli(argv: List[str]) -> int:
    """
    Parse a file, print the tree and the parse time.

    Exit code 0 on success, 1 on a parse failure or an unreadable file.
    """
    ap = argparse.ArgumentParser(description="Parse a JSON file into a value tree")
    ap.add_argument("file", help="JSON file to parse")
    ap.add_argument("--strict", action="store_true", help="reject data after the root value")
    ap.add_argument("--quiet", action="store_true", help="print OK instead of the tree")
    ap.add_argument("--recursion-limit", type=int, default=None,
                    help="raise the interpreter recursion limit for deep nesting")
    args = ap.parse_args(argv)

    if args.recursion_limit is not None:
        sys.setrecursionlimit(args.recursion_limit)

    try:
        with open(args.file, "r", encoding="utf-8") as fh:
            data = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    started = time.perf_counter()
    try:
        if args.strict:
            result = parse_all(data)
        else:
            result, _ = parse(data)
    except ParseError as exc:
        print(f"SyntaxError: {exc}", file=sys.stderr)
        return 1
    elapsed_us = int((time.perf_counter() - started) * 1_000_000)

    if args.quiet:
        print("OK")
    else:
        print(pprint.pformat(result))
        print(f"{elapsed_us}μs")
    return 0


def main() -> None:
    # The timing suffix is not ASCII; never fail on a narrow console.
    sys.stdout.reconfigure(errors="replace")
    sys.exit(_cli(sys.argv[1:]))

# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    main()
