"""Core domain models and the in-memory section store."""

from .errors import (
    DocumentStoreError,
    DuplicateTitle,
    InvalidTitle,
    NotFound,
    ParseError,
    SerializeError,
)
from .section import Section
from .store import DocumentStore

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
