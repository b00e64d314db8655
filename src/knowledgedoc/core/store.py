"""In-memory ordered store of titled sections."""

import logging
from threading import Lock
from typing import Iterable, Iterator

from .errors import DuplicateTitle, InvalidTitle, NotFound
from .section import Section

logger = logging.getLogger(__name__)


def validate_title(title: str) -> None:
    """Check that a title can be written back as a single heading line.

    Raises:
        InvalidTitle: If the title is empty, spans lines or has padding
    """
    if not isinstance(title, str) or not title:
        raise InvalidTitle(title, "title must be a non-empty string")
    if "\n" in title or "\r" in title:
        raise InvalidTitle(title, "title must be a single line")
    if title != title.strip():
        raise InvalidTitle(title, "title must not start or end with whitespace")


class DocumentStore:
    """Ordered collection of sections addressed by title.

    Titles are unique. Positions run from 0 to len-1 in display order and
    only change when a section is removed or moved explicitly. A failed
    operation leaves the store unchanged.

    All access goes through a single lock so the title map and the order
    list are always updated together. Iteration methods work on a snapshot
    taken when they are called.
    """

    def __init__(self):
        self._bodies: dict[str, str] = {}
        self._order: list[str] = []
        self._lock = Lock()

    @classmethod
    def from_sections(cls, sections: Iterable[tuple[str, str]]) -> "DocumentStore":
        """Build a store from (title, body) pairs in order.

        Raises:
            DuplicateTitle: On the first repeated title
        """
        store = cls()
        for title, body in sections:
            store.add_section(title, body)
        return store

    def __len__(self) -> int:
        with self._lock:
            return len(self._order)

    def __contains__(self, title: object) -> bool:
        with self._lock:
            return title in self._bodies

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_titles())

    def __repr__(self) -> str:
        return f"DocumentStore(sections={len(self)})"

    def _section(self, title: str) -> Section:
        # Caller holds the lock
        return Section(title=title, body=self._bodies[title], position=self._order.index(title))

    def add_section(self, title: str, body: str) -> Section:
        """Append a new section to the end of the order.

        Args:
            title: Unique section title
            body: Section text

        Returns:
            The stored section

        Raises:
            DuplicateTitle: If the title is already present
            InvalidTitle: If the title cannot be used as a heading
        """
        validate_title(title)
        with self._lock:
            if title in self._bodies:
                raise DuplicateTitle(title)
            self._bodies[title] = body
            self._order.append(title)
            position = len(self._order) - 1
        logger.debug("Added section %r at position %d", title, position)
        return Section(title=title, body=body, position=position)

    def get_section(self, title: str) -> Section:
        """Look up a section by title.

        Raises:
            NotFound: If the title is absent
        """
        with self._lock:
            if title not in self._bodies:
                raise NotFound(title)
            return self._section(title)

    def update_section(self, title: str, new_body: str) -> Section:
        """Replace the body of an existing section, keeping its position.

        Raises:
            NotFound: If the title is absent
        """
        with self._lock:
            if title not in self._bodies:
                raise NotFound(title)
            self._bodies[title] = new_body
            section = self._section(title)
        logger.debug("Updated section %r (%d chars)", title, len(new_body))
        return section

    def remove_section(self, title: str) -> Section:
        """Delete a section; later sections move up by one position.

        Returns:
            The removed section as it was before removal

        Raises:
            NotFound: If the title is absent
        """
        with self._lock:
            if title not in self._bodies:
                raise NotFound(title)
            section = self._section(title)
            del self._order[section.position]
            del self._bodies[title]
        logger.debug("Removed section %r from position %d", title, section.position)
        return section

    def move_section(self, title: str, position: int) -> Section:
        """Move a section to a new position, shifting the others.

        Negative positions count from the end, as with list indexes.

        Raises:
            NotFound: If the title is absent
            IndexError: If the position is outside the current order
        """
        with self._lock:
            if title not in self._bodies:
                raise NotFound(title)
            count = len(self._order)
            target = position + count if position < 0 else position
            if not 0 <= target < count:
                raise IndexError(f"Position {position} out of range for {count} sections")
            self._order.remove(title)
            self._order.insert(target, title)
            section = self._section(title)
        logger.debug("Moved section %r to position %d", title, target)
        return section

    def list_titles(self) -> tuple[str, ...]:
        """Return titles in display order.

        The result is a snapshot taken when this method is called: it can be
        iterated any number of times, and later mutations do not change it.
        Call again to see the current order.
        """
        with self._lock:
            return tuple(self._order)

    def sections(self) -> Iterator[Section]:
        """Iterate over full sections in display order, as a snapshot."""
        with self._lock:
            snapshot = tuple(
                Section(title=title, body=self._bodies[title], position=i)
                for i, title in enumerate(self._order)
            )
        return iter(snapshot)

    def search(self, query: str) -> list[Section]:
        """Find sections where the query appears in the title or body.

        Args:
            query: The text to search for (case-insensitive)

        Returns:
            Matching sections in display order
        """
        query = query.lower()
        return [
            section for section in self.sections()
            if query in section.title.lower() or query in section.body.lower()
        ]

    def copy(self) -> "DocumentStore":
        """Return an independent store with the same sections and order."""
        return DocumentStore.from_sections((s.title, s.body) for s in self.sections())
