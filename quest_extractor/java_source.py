"""
Structural scanning helpers for Quest Helper Java sources.
No Java parser is involved: members are found by brace depth, strings by a
quote-and-concatenation reader, call arguments by parenthesis depth.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Type token such as int, List<PanelDetails>, Map<String, List<X>>, String[]
_RETURN_TYPE = r"[\w.]+(?:\s*<[\w\s<>,.?\[\]]*>)?(?:\s*\[\])*"
_MODIFIERS = r"(?:(?:public|protected|private|static|final|synchronized|abstract)\s+)*"

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


@dataclass(frozen=True)
class SourceUnit:
    """One fetched Java document and the quest name it was fetched for."""
    name: str
    text: str


@dataclass(frozen=True)
class MemberSpan:
    """Body of a named member: text between its braces, offsets into the source."""
    member_name: str
    start: int
    end: int
    text: str


def _declaration_pattern(member_name: str) -> "re.Pattern[str]":
    return re.compile(
        r"(?:@\w+\s+)*"
        + _MODIFIERS
        + r"(?:" + _RETURN_TYPE + r"\s+)?"
        + r"(?<![\w.])" + re.escape(member_name)
        + r"\s*\([^)]*\)\s*(?:throws\s+[\w.,\s]+?)?\s*\{"
    )


def locate_member(source: str, member_name: str) -> Optional[MemberSpan]:
    """
    Find the body of member_name in source.

    Returns None when no declaration exists. Brace counting does not
    understand string or comment contents.
    """
    match = _declaration_pattern(member_name).search(source)
    if not match:
        return None
    start = match.end()
    depth = 1
    i = start
    while i < len(source):
        c = source[i]
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return MemberSpan(member_name, start, i, source[start:i])
        i += 1
    # Unbalanced: take everything to the end of the document
    return MemberSpan(member_name, start, len(source), source[start:])


def member_body(source: str, member_name: str) -> str:
    """Body text of member_name, or '' when the member is absent."""
    span = locate_member(source, member_name)
    return span.text if span else ""


def _skip_whitespace(source: str, i: int) -> int:
    while i < len(source) and source[i].isspace():
        i += 1
    return i


def read_string(source: str, open_quote: int) -> str:
    """
    Read the Java string literal starting at open_quote, following
    "a" + "b" + ... concatenations. Fragments are joined with no separator.
    """
    if open_quote >= len(source) or source[open_quote] != '"':
        raise ValueError(f"No opening quote at offset {open_quote}")
    parts: List[str] = []
    i = open_quote
    while True:
        i += 1
        chars: List[str] = []
        closed = False
        while i < len(source):
            c = source[i]
            if c == "\\":
                if i + 1 < len(source):
                    nxt = source[i + 1]
                    chars.append(_ESCAPES.get(nxt, nxt))
                i += 2
                continue
            if c == '"':
                i += 1
                closed = True
                break
            chars.append(c)
            i += 1
        parts.append("".join(chars))
        if not closed:
            break
        i = _skip_whitespace(source, i)
        if i >= len(source) or source[i] != "+":
            break
        i = _skip_whitespace(source, i + 1)
        if i >= len(source) or source[i] != '"':
            break
    return "".join(parts)


def _skip_literal(source: str, i: int) -> int:
    """Return the offset just past the string or char literal starting at i."""
    quote = source[i]
    i += 1
    while i < len(source):
        if source[i] == "\\":
            i += 2
            continue
        if source[i] == quote:
            return i + 1
        i += 1
    return i


def read_call_arguments(source: str, open_paren: int) -> List[str]:
    """
    Split the argument list of the call whose '(' is at open_paren into
    top-level argument texts. Nested calls and string literals are kept
    intact; an unclosed call yields whatever was read.
    """
    args: List[str] = []
    depth = 0
    current: List[str] = []
    i = open_paren
    while i < len(source):
        c = source[i]
        if c in "\"'":
            end = _skip_literal(source, i)
            if depth >= 1:
                current.append(source[i:end])
            i = end
            continue
        if c in "([{":
            depth += 1
            if depth > 1:
                current.append(c)
        elif c in ")]}":
            depth -= 1
            if depth == 0:
                break
            current.append(c)
        elif c == "," and depth == 1:
            args.append("".join(current).strip())
            current = []
        else:
            current.append(c)
        i += 1
    tail = "".join(current).strip()
    if tail or args:
        args.append(tail)
    return args


def is_identifier(token: str) -> bool:
    return bool(IDENTIFIER_RE.match(token))


def identifier_tokens(args: List[str]) -> List[str]:
    """Keep the last word of each argument when it is a bare identifier."""
    names = []
    for arg in args:
        words = arg.split()
        if not words:
            continue
        if is_identifier(words[-1]):
            names.append(words[-1])
    return names


def extract_class_name(source: str) -> Optional[str]:
    """Declared public class name, e.g. 'public class CooksAssistant extends ...'."""
    m = re.search(r"public\s+(?:(?:final|abstract)\s+)*class\s+(\w+)", source)
    return m.group(1) if m else None
