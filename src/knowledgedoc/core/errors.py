"""Exceptions raised by the document store and the markdown codec."""


class DocumentStoreError(Exception):
    """Base class for all knowledgedoc errors."""


class DuplicateTitle(DocumentStoreError):
    """A section with this title already exists."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"Section already exists: {title!r}")


class NotFound(DocumentStoreError, KeyError):
    """No section with this title exists."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"No such section: {title!r}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]


class InvalidTitle(DocumentStoreError, ValueError):
    """The title cannot be written as a single heading line."""

    def __init__(self, title: str, reason: str):
        self.title = title
        self.reason = reason
        super().__init__(f"Invalid section title {title!r}: {reason}")


class ParseError(DocumentStoreError, ValueError):
    """The persisted layout is malformed."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class SerializeError(DocumentStoreError, ValueError):
    """A section body would not survive being written and read back."""

    def __init__(self, title: str, line: str):
        self.title = title
        self.line = line
        super().__init__(
            f"Body of section {title!r} contains a section-level heading: {line!r}"
        )
