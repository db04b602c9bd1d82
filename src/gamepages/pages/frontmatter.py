"""
Front matter splitting for page documents.

A page document starts with a line holding the delimiter, followed by the
metadata block, the same delimiter again and the markdown body.
"""

import io
import logging
from typing import BinaryIO, Tuple, Union

from ..errors import MalformedDocument, UnterminatedFrontMatter

FRONT_MATTER_DELIMITER = b"```"

DocumentSource = Union[BinaryIO, bytes, bytearray, str]


def as_stream(source: DocumentSource) -> BinaryIO:
    """Wrap in-memory documents so every source reads like a binary stream."""
    if isinstance(source, str):
        return io.BytesIO(source.encode("utf-8"))
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    return source


class FrontMatterSplitter:
    """Splits a raw document into its front matter and body in one pass."""

    def __init__(self, delimiter: bytes = FRONT_MATTER_DELIMITER):
        if not delimiter or b"\n" in delimiter:
            raise ValueError("Delimiter must be non-empty and fit on one line")
        self.delimiter = delimiter
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def split(self, source: DocumentSource) -> Tuple[bytes, bytes]:
        """Read a document and return its (front_matter, body).

        Args:
            source: Binary stream, or the whole document as bytes/str

        Returns:
            Front matter without delimiters, and the body read verbatim

        Raises:
            MalformedDocument: If the stream does not start with the delimiter
            UnterminatedFrontMatter: If no closing delimiter is found
        """
        stream = as_stream(source)

        head = stream.read(len(self.delimiter))
        if head != self.delimiter:
            raise MalformedDocument(head)

        # The opening delimiter owns its whole line
        stream.readline()

        front_matter = bytearray()
        while True:
            line = stream.readline()
            if not line:
                raise UnterminatedFrontMatter()

            # The delimiter has no newline, so it never spans two lines
            pos = line.find(self.delimiter)
            if pos < 0:
                front_matter += line
                continue

            front_matter += line[:pos]
            body = line[pos + len(self.delimiter):] + stream.read()
            break

        self.logger.debug(
            f"Split document: {len(front_matter)} bytes of front matter, "
            f"{len(body)} bytes of body"
        )
        return bytes(front_matter), bytes(body)


_default_splitter = FrontMatterSplitter()


def split_front_matter(source: DocumentSource) -> Tuple[bytes, bytes]:
    """Split a document with the standard delimiter."""
    return _default_splitter.split(source)
