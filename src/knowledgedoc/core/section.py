"""Section dataclass for knowledge document content."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Section:
    """A titled block of text and its place in the document order."""
    title: str
    body: str
    position: int

    def __repr__(self) -> str:
        body_preview = self.body[:100] + "..." if len(self.body) > 100 else self.body
        return f"Section(title={self.title!r}, position={self.position}, body={body_preview!r})"
