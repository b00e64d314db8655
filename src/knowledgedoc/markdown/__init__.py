"""Markdown persisted layout for document stores."""

from .codec import DEFAULT_SECTION_LEVEL, dump, dumps, load, loads
from .headings import ends_in_fence, get_heading_level, heading_text, iter_headings

__all__ = [
    "DEFAULT_SECTION_LEVEL",
    "dump",
    "dumps",
    "load",
    "loads",
    "ends_in_fence",
    "get_heading_level",
    "heading_text",
    "iter_headings",
]
