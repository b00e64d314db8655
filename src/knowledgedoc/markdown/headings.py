"""Heading detection for markdown text with fenced code blocks."""

import re
from typing import Iterator

HEADING_RE = re.compile(r'^(#{1,6})[ \t]+(.*?)\s*$')
FENCE_RE = re.compile(r'^\s{0,3}(`{3,}|~{3,})')


def get_heading_level(line: str) -> int | None:
    """Get the heading level (1-6) from a markdown line, or None if not a heading.

    Args:
        line: A line of markdown text

    Returns:
        The heading level (1-6) or None if not a heading
    """
    match = HEADING_RE.match(line)
    if match and match.group(2):
        return len(match.group(1))
    return None


def heading_text(line: str) -> str:
    """Return the text of a heading line without the # marker."""
    match = HEADING_RE.match(line)
    if not match:
        raise ValueError(f"Not a heading: {line!r}")
    return match.group(2)


def iter_headings(lines: list[str]) -> Iterator[tuple[int, int, str]]:
    """Yield (index, level, text) for each heading outside fenced code.

    A fence opened with ``` is only closed by ``` of at least the same
    length, likewise for ~~~. An unclosed fence runs to the end of input.

    Args:
        lines: Markdown split into lines

    Yields:
        Zero-based line index, heading level and heading text
    """
    fence: str | None = None
    for i, line in enumerate(lines):
        fence_match = FENCE_RE.match(line)
        if fence is not None:
            # Closing fence: same character, at least as long, nothing after it
            if fence_match:
                marker = fence_match.group(1)
                if marker[0] == fence[0] and len(marker) >= len(fence) and not line.strip().lstrip(fence[0]):
                    fence = None
            continue
        if fence_match:
            fence = fence_match.group(1)
            continue
        level = get_heading_level(line)
        if level is not None:
            yield i, level, heading_text(line)


def ends_in_fence(lines: list[str]) -> bool:
    """Return True if the lines leave a fenced code block open."""
    probe = "# probe"
    last = None
    for i, _, _ in iter_headings(lines + [probe]):
        last = i
    return last != len(lines)
