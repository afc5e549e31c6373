"""Plain-text document reader.

:func:`read_text` loads a file without newline translation; UTF-8 byte-order
marks are consumed by the ``"utf-8-sig"`` codec.  :func:`read_document` turns
the text into a document tree with
:func:`~prosecheck.document.builders.document_from_text`.  ``FileNotFoundError``
and other I/O errors propagate to the caller.
"""

from __future__ import annotations

import os

from prosecheck.document.base import Node
from prosecheck.document.builders import document_from_text

PathLikeStr = os.PathLike[str]


def read_text(
    path: str | PathLikeStr,
    *,
    encoding: str = "utf-8-sig",
    errors: str = "strict",
) -> str:
    """Read a plain-text file as-is."""

    with open(path, "r", encoding=encoding, errors=errors, newline="") as f:
        return f.read()


def read_document(path: str | PathLikeStr, *, encoding: str = "utf-8-sig") -> Node:
    """Read ``path`` and return its document tree."""

    return document_from_text(read_text(path, encoding=encoding))


__all__ = ["read_document", "read_text"]
