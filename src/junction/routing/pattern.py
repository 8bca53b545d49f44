"""Route pattern parsing.

Pattern syntax::

    /users                 -> [Literal("users")]
    /users/:id             -> [Literal("users"), Named("id")]
    /users/:id[\\d+]        -> [Literal("users"), NamedRegex("id", re.compile(r"\\d+"))]
    /files/:name[[a-z]+]   -> brackets nest; a "/" inside brackets stays in the regex

Leading, trailing and doubled slashes are ignored, so ``/`` is the root
pattern with no segments.
"""

import re

from junction.errors import InvalidPatternError
from junction.routing.route import Literal, Named, NamedRegex, RoutePattern, Segment

SEPARATOR = "/"
PARAM_MARKER = ":"


def split_path(path: str) -> list[str]:
    """Split a concrete request path into non-empty segments."""
    return [part for part in path.split(SEPARATOR) if part]


def _split_pattern(pattern: str) -> list[str]:
    """Split a pattern on separators that are not inside a bracket."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    escaped = False

    for char in pattern:
        if escaped:
            current.append(char)
            escaped = False
            continue
        if char == "\\" and depth:
            current.append(char)
            escaped = True
            continue
        if char == "[" and (depth or (current and current[0] == PARAM_MARKER)):
            depth += 1
        elif char == "]" and depth:
            depth -= 1
        elif char == SEPARATOR and not depth:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)

    if depth:
        raise InvalidPatternError(pattern, "unterminated '[' in regex segment")
    parts.append("".join(current))
    return [part for part in parts if part]


def _parse_param(pattern: str, part: str) -> Named | NamedRegex:
    body = part[len(PARAM_MARKER):]
    bracket = body.find("[")
    if bracket == -1:
        name, regex_src = body, None
    else:
        if not body.endswith("]"):
            raise InvalidPatternError(pattern, f"unexpected text after ']' in {part!r}")
        name, regex_src = body[:bracket], body[bracket + 1 : -1]

    if not name:
        raise InvalidPatternError(pattern, f"missing parameter name in {part!r}")
    if not name.isidentifier():
        raise InvalidPatternError(pattern, f"{name!r} is not a valid parameter name")
    if regex_src is None:
        return Named(name)
    if not regex_src:
        raise InvalidPatternError(pattern, f"empty regex for parameter {name!r}")
    try:
        regex = re.compile(regex_src)
    except re.error as exc:
        raise InvalidPatternError(pattern, f"bad regex for parameter {name!r}: {exc}") from exc
    return NamedRegex(name, regex)


def _closing_bracket(part: str) -> int:
    """Index of the bracket that closes the first ``[`` in *part*, or -1."""
    depth = 0
    escaped = False
    for index, char in enumerate(part):
        if escaped:
            escaped = False
        elif char == "\\" and depth:
            escaped = True
        elif char == "[":
            depth += 1
        elif char == "]" and depth:
            depth -= 1
            if not depth:
                return index
    return -1


def parse_pattern(pattern: str) -> RoutePattern:
    """Parse a pattern string into a ``RoutePattern``.

    Raises ``InvalidPatternError`` if the pattern is empty, a bracket is
    unterminated or followed by more text, a parameter name is missing,
    invalid or duplicated, or a regex is empty or does not compile.
    """
    if not pattern or not pattern.strip():
        raise InvalidPatternError(pattern, "pattern is empty")

    segments: list[Segment] = []
    seen: set[str] = set()
    for part in _split_pattern(pattern):
        if not part.startswith(PARAM_MARKER):
            segments.append(Literal(part))
            continue

        close = _closing_bracket(part)
        if close != -1 and close != len(part) - 1:
            raise InvalidPatternError(pattern, f"unexpected text after ']' in {part!r}")

        segment = _parse_param(pattern, part)
        if segment.name in seen:
            raise InvalidPatternError(pattern, f"duplicate parameter name {segment.name!r}")
        seen.add(segment.name)
        segments.append(segment)

    return RoutePattern(source=pattern, segments=tuple(segments))
