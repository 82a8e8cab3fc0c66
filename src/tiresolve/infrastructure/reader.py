"""Bounded reads of terminfo records.

Compiled terminfo entries are small; a record is read into at most
``capacity`` bytes and anything beyond that is left unread. Reaching the
capacity is truncation, not failure. I/O errors propagate as ``OSError``
so callers can tell them apart from ordinary end of data.
"""

from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import BinaryIO

MAX_RECORD_SIZE = 4096


def read_fd(fd: int, capacity: int = MAX_RECORD_SIZE) -> bytes:
    """Read from descriptor *fd* until *capacity* bytes or end of file."""
    buf = bytearray()
    while len(buf) < capacity:
        chunk = os.read(fd, capacity - len(buf))
        if not chunk:
            break
        buf += chunk
    return bytes(buf)


def read_stream(stream: BinaryIO, capacity: int = MAX_RECORD_SIZE) -> bytes:
    """Read from a binary *stream* until *capacity* bytes or end of stream.

    Only a ``b""`` read is end of stream. ``None`` from a non-blocking
    stream is an I/O error: the record would otherwise come back short.
    """
    buf = bytearray()
    while len(buf) < capacity:
        chunk = stream.read(capacity - len(buf))
        if chunk is None:
            raise BlockingIOError(errno.EAGAIN, "Stream has no data available", len(buf))
        if chunk == b"":
            break
        buf += chunk
    return bytes(buf)


def read_file(path: str | Path, capacity: int = MAX_RECORD_SIZE) -> bytes:
    """Open *path* read-only and read it with :func:`read_fd`.

    The descriptor is closed on every exit path.
    """
    fd = os.open(path, os.O_RDONLY)
    try:
        return read_fd(fd, capacity)
    finally:
        os.close(fd)


def has_more(path: str | Path, consumed: int) -> bool:
    """True if the file at *path* is longer than *consumed* bytes."""
    try:
        return os.stat(path).st_size > consumed
    except OSError:
        return False
