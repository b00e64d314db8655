"""Heading-delimited knowledge document store."""

from knowledgedoc.core import (
    DocumentStore,
    DocumentStoreError,
    DuplicateTitle,
    InvalidTitle,
    NotFound,
    ParseError,
    Section,
    SerializeError,
)

__version__ = "0.1.0"

__all__ = [
    "DocumentStore",
    "DocumentStoreError",
    "DuplicateTitle",
    "InvalidTitle",
    "NotFound",
    "ParseError",
    "Section",
    "SerializeError",
]
