"""
Error taxonomy for the page content pipeline.

Every stage raises one of these to its immediate caller. They describe
deterministic parse/render failures of a single document, so callers should
turn them into a user-visible response rather than retry.
"""

from typing import Optional


class PageError(Exception):
    """Base class for all page pipeline failures."""
    pass


class MalformedDocument(PageError):
    """Raised when a document does not start with the front matter delimiter."""

    def __init__(self, found: bytes):
        self.found = found
        super().__init__(
            f"no opening front matter delimiter found: {found!r} instead"
        )


class UnterminatedFrontMatter(PageError):
    """Raised when the stream ends before the closing delimiter."""

    def __init__(self, message: str = "did not find closing front matter delimiter"):
        super().__init__(message)


class _WrappedPageError(PageError):
    """Page error that keeps a reference to the underlying library error."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class MetadataDecodeError(_WrappedPageError):
    """Raised when the front matter is not valid page metadata."""
    pass


class TemplateError(_WrappedPageError):
    """Raised for bad template syntax or an unbound template reference."""
    pass


class RenderError(_WrappedPageError):
    """Raised when the markdown transform cannot process its input."""
    pass


class NotParsed(PageError):
    """Raised when a page is used before a successful parse."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"cannot call {operation}() before parse() succeeded")


class ConfigError(Exception):
    """Raised when configuration is invalid or cannot be used."""
    pass
