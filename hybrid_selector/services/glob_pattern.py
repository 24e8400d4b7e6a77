"""
Compiled glob patterns for repository paths.

A pattern is parsed once into a list of path segments:

- Literal: a segment without wildcards, compared case-insensitively
- Wildcard: a segment containing ``*``, which never crosses ``/``
- DoubleStar: ``**``, zero or more whole directories

A pattern without any ``*`` is a nested literal: it matches the exact path or
the same name nested in any subdirectory (``Dockerfile`` matches
``backend/Dockerfile`` but not ``Dockerfile.dev``).
"""

import re
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Literal:
    """Segment matched by case-insensitive equality."""

    text: str

    def matches(self, segment: str) -> bool:
        return segment == self.text


@dataclass(frozen=True)
class Wildcard:
    """Segment with one or more ``*`` wildcards."""

    regex: re.Pattern[str]

    @classmethod
    def from_text(cls, text: str) -> "Wildcard":
        pieces = [re.escape(piece) for piece in text.split("*")]
        return cls(regex=re.compile("^" + "[^/]*".join(pieces) + "$"))

    def matches(self, segment: str) -> bool:
        return self.regex.match(segment) is not None


@dataclass(frozen=True)
class DoubleStar:
    """Zero or more directory segments."""


Segment = Literal | Wildcard | DoubleStar


@dataclass(frozen=True)
class GlobPattern:
    """A glob pattern compiled to an explicit segment list."""

    source: str
    segments: tuple[Segment, ...]
    nested_literal: bool

    @classmethod
    def compile(cls, pattern: str) -> "GlobPattern":
        """Parse a glob pattern into segments."""
        return _compile(pattern)

    def matches(self, path: str) -> bool:
        """Check whether a repository path matches this pattern."""
        normalized = _normalize(path)
        if self.nested_literal:
            literal = "/".join(s.text for s in self.segments if isinstance(s, Literal))
            return normalized == literal or normalized.endswith("/" + literal)
        return _match_segments(self.segments, tuple(normalized.split("/")))


def _normalize(path: str) -> str:
    normalized = path.strip().replace("\\", "/").lower()
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.strip("/")


@lru_cache(maxsize=1024)
def _compile(pattern: str) -> GlobPattern:
    normalized = _normalize(pattern)
    segments: list[Segment] = []

    for part in normalized.split("/"):
        if part == "**":
            # Collapse consecutive ** segments
            if not segments or not isinstance(segments[-1], DoubleStar):
                segments.append(DoubleStar())
        elif "*" in part:
            segments.append(Wildcard.from_text(part))
        else:
            segments.append(Literal(part))

    return GlobPattern(
        source=pattern,
        segments=tuple(segments),
        nested_literal="*" not in normalized,
    )


def _match_segments(segments: tuple[Segment, ...], parts: tuple[str, ...]) -> bool:
    if not segments:
        return not parts

    head, rest = segments[0], segments[1:]

    if isinstance(head, DoubleStar):
        # Try consuming 0..len(parts) directories
        return any(_match_segments(rest, parts[i:]) for i in range(len(parts) + 1))

    if not parts:
        return False

    return head.matches(parts[0]) and _match_segments(rest, parts[1:])


def glob_match(pattern: str, path: str) -> bool:
    """Match a single path against a glob pattern."""
    return GlobPattern.compile(pattern).matches(path)


def matches_any(patterns: list[str], path: str) -> bool:
    """Check whether a path matches any of the given patterns."""
    return any(glob_match(p, path) for p in patterns)
