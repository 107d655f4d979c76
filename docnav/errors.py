"""Errors raised by docnav."""


class DocnavError(Exception):
    """Base class for docnav errors."""


class DocumentNotFoundError(DocnavError, KeyError):
    """Raised when a requested document is not part of the corpus."""

    def __init__(self, identifier: str):
        super().__init__(identifier)
        self.identifier = identifier

    def __str__(self) -> str:
        return f"Document not found: {self.identifier}"


class DocsRootNotFoundError(DocnavError):
    """Raised when no docs tree can be located."""
