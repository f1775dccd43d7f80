"""Extension based registry for entity input and summary output.

Readers for ``.json`` and ``.csv`` and a ``.json`` writer are registered by
default.  The registry dispatches based on the file extension;
``UnsupportedFormatError`` is raised when no handler is registered for it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

from ..model.base import LocatedEntity
from ..utils.errors import UnsupportedFormatError
from .readers.csv_reader import read_csv_entities
from .readers.json_reader import read_json_entities
from .records import entity_from_record
from .writers.json_writer import write_json

ReaderFunc = Callable[..., list[LocatedEntity]]
WriterFunc = Callable[..., None]

_READERS: dict[str, ReaderFunc] = {}
_WRITERS: dict[str, WriterFunc] = {}


def register_reader(ext: str, func: ReaderFunc) -> None:
    """Register a reader for files ending with ``ext``.

    Parameters
    ----------
    ext:
        File extension including the dot (e.g. ``".json"``).  Matching is
        case-insensitive.
    func:
        Callable that reads a file and returns a list of entities.
    """

    _READERS[ext.lower()] = func


def register_writer(ext: str, func: WriterFunc) -> None:
    """Register a writer for files ending with ``ext``."""

    _WRITERS[ext.lower()] = func


def get_extension(path: str | os.PathLike[str]) -> str:
    """Return the lower-cased file extension of ``path`` (including the dot).

    Returns an empty string when the path has no extension.
    """

    suffix = Path(path).suffix
    return suffix.lower() if suffix else ""


def read_entities(path: str | os.PathLike[str], **kwargs: Any) -> list[LocatedEntity]:
    """Read entities from ``path`` using the reader registered for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no reader is registered for the file extension.
    """

    ext = get_extension(path)
    reader = _READERS.get(ext)
    if reader is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    return reader(path, **kwargs)


def write_summaries(path: str | os.PathLike[str], data: Any, **kwargs: Any) -> None:
    """Write ``data`` to ``path`` using the writer registered for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no writer is registered for the file extension.
    """

    ext = get_extension(path)
    writer = _WRITERS.get(ext)
    if writer is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    writer(path, data, **kwargs)


register_reader(".json", read_json_entities)
register_reader(".csv", read_csv_entities)
register_writer(".json", write_json)

__all__ = [
    "ReaderFunc",
    "WriterFunc",
    "entity_from_record",
    "register_reader",
    "register_writer",
    "get_extension",
    "read_entities",
    "write_summaries",
]
