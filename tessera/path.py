"""
Path formatting and parsing for error locations.

A path is a tuple of field names and list indexes, e.g.
("user", "addresses", 2, "zip"), rendered as "user.addresses[2].zip".

Supports:
- Simple keys: "user.name"
- Array indices: "items[0]", "[3].name"
- Quoted keys for anything that is not an identifier: "headers['content-type']"
"""

import re

Path = tuple[str | int, ...]


class PathParser:
    """Parser for error location strings."""

    KEY_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*")
    INDEX_PATTERN = re.compile(r"^\[(\d+)\]")
    QUOTED_KEY_PATTERN = re.compile(r"^\['((?:[^'\\]|\\.)*)'\]")

    def parse(self, path_str: str) -> Path:
        """Parse a location string into a path tuple."""
        segments: list[str | int] = []
        remaining = path_str

        while remaining:
            segment, rest = self._parse_segment(remaining, first=not segments)
            if segment is None:
                raise ValueError(f"Invalid path syntax at: {remaining}")
            segments.append(segment)
            remaining = rest

        return tuple(segments)

    def _parse_segment(self, s: str, first: bool) -> tuple[str | int | None, str]:
        if match := self.INDEX_PATTERN.match(s):
            return int(match.group(1)), s[match.end() :]

        if match := self.QUOTED_KEY_PATTERN.match(s):
            key = re.sub(r"\\(.)", r"\1", match.group(1))
            return key, s[match.end() :]

        # Keys after the first one must be introduced by a dot
        if not first:
            if not s.startswith("."):
                return None, s
            s = s[1:]

        if match := self.KEY_PATTERN.match(s):
            return match.group(0), s[match.end() :]

        return None, s


def _format_key(key: str) -> str:
    if PathParser.KEY_PATTERN.fullmatch(key):
        return key
    escaped = key.replace("\\", "\\\\").replace("'", "\\'")
    return f"['{escaped}']"


def format_path(path: Path) -> str:
    """
    Render a path tuple.

    Examples:
        format_path(("user", "addresses", 2, "zip"))  # "user.addresses[2].zip"
        format_path((0, "name"))                     # "[0].name"
        format_path(())                              # ""
    """
    parts: list[str] = []
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
            continue
        key = _format_key(segment)
        if key.startswith("[") or not parts:
            parts.append(key)
        else:
            parts.append(f".{key}")
    return "".join(parts)


def parse_path(path_str: str) -> Path:
    """Convenience function to parse a location string."""
    return PathParser().parse(path_str)
