"""Read and write a document store as heading-delimited markdown."""

import logging
import os
import tempfile
from pathlib import Path

from knowledgedoc.core import DocumentStore, DuplicateTitle, InvalidTitle, ParseError, SerializeError

from .headings import ends_in_fence, iter_headings

logger = logging.getLogger(__name__)

DEFAULT_SECTION_LEVEL = 2


def _check_level(level: int) -> None:
    if not 1 <= level <= 6:
        raise ValueError(f"Section level must be between 1 and 6, got {level}")


def loads(text: str, level: int = DEFAULT_SECTION_LEVEL) -> DocumentStore:
    """Parse markdown into a document store.

    Each heading at exactly ``level`` starts a section whose title is the
    heading text. Every following line up to the next such heading is the
    body, kept verbatim. Deeper headings are part of the body. Headings
    inside fenced code blocks are ignored.

    Args:
        text: The full markdown content
        level: Heading level that delimits sections (number of # symbols)

    Returns:
        A new DocumentStore with the sections in file order

    Raises:
        ParseError: If text appears before the first section, a heading is
            shallower than ``level``, or a section title repeats
    """
    _check_level(level)
    lines = text.split('\n')

    # Find section boundaries
    starts: list[tuple[int, str]] = []
    for i, heading_level, title in iter_headings(lines):
        if heading_level < level:
            raise ParseError(
                f"heading level {heading_level} is above section level {level}: {title!r}",
                line_number=i + 1,
            )
        if heading_level == level:
            starts.append((i, title))

    first_start = starts[0][0] if starts else len(lines)
    for i in range(first_start):
        if lines[i].strip():
            raise ParseError("content before the first section heading", line_number=i + 1)
    if first_start:
        logger.debug("Skipped %d blank line(s) before the first section", first_start)

    store = DocumentStore()
    for n, (start_idx, title) in enumerate(starts):
        end_idx = starts[n + 1][0] if n + 1 < len(starts) else len(lines)
        body = '\n'.join(lines[start_idx + 1:end_idx])
        try:
            store.add_section(title, body)
        except DuplicateTitle:
            raise ParseError(f"duplicate section heading {title!r}", line_number=start_idx + 1) from None
        except InvalidTitle as e:
            raise ParseError(f"invalid section heading: {e.reason}", line_number=start_idx + 1) from None

    return store


def dumps(store: DocumentStore, level: int = DEFAULT_SECTION_LEVEL) -> str:
    """Serialize a document store to markdown.

    Sections are written in stored order as a heading line followed by the
    body. Output of ``loads`` on the result has the same titles, bodies and
    order.

    Args:
        store: The store to serialize
        level: Heading level to write section titles at

    Returns:
        The markdown text

    Raises:
        SerializeError: If a body contains a heading at or above ``level``
            that would split it into separate sections on reload
    """
    _check_level(level)
    marker = '#' * level
    sections = list(store.sections())
    chunks = []
    for section in sections:
        body_lines = section.body.split('\n')
        for i, heading_level, _ in iter_headings(body_lines):
            if heading_level <= level:
                raise SerializeError(section.title, body_lines[i])
        if section.position < len(sections) - 1 and ends_in_fence(body_lines):
            raise SerializeError(section.title, "unclosed code fence")
        heading = f"{marker} {section.title}"
        chunks.append(f"{heading}\n{section.body}" if section.body else heading)
    return '\n'.join(chunks)


def load(path: str | Path, level: int = DEFAULT_SECTION_LEVEL) -> DocumentStore:
    """Load a knowledge file from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        ParseError: If the file content is malformed
    """
    path = Path(path)
    # No newline translation, so a lone \r stays inside its line as dump wrote it
    with open(path, encoding="utf-8", newline="") as f:
        store = loads(f.read(), level=level)
    logger.info("Loaded %d section(s) from %s", len(store), path)
    return store


def dump(store: DocumentStore, path: str | Path, level: int = DEFAULT_SECTION_LEVEL) -> None:
    """Write a store to disk, replacing the file atomically.

    The text is written to a temporary file in the target directory and
    then moved over the destination, so readers never see a partial file.
    """
    path = Path(path)
    text = dumps(store, level=level)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("Wrote %d section(s) to %s", len(store), path)
