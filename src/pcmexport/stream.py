"""Append-only payload stream with deferred header patching."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .errors import IoFailure, SizeLimitExceeded
from .fileio import FileHandle

__all__ = ["StreamWriter", "Patch"]

logger = logging.getLogger(__name__)

# (byte offset, encoded field)
Patch = Tuple[int, bytes]


class StreamWriter:
    """
    Owns an open file handle and counts the payload bytes appended to it.

    ``max_payload`` is the largest payload the container's 32-bit size fields
    can describe. Writes that would exceed it are rejected before any byte is
    written.
    """

    def __init__(self, handle: FileHandle, path: Path, max_payload: int) -> None:
        self._handle: Optional[FileHandle] = handle
        self._path = path
        self._max_payload = max_payload
        self._bytes_written = 0

    @property
    def bytes_written(self) -> int:
        return self._bytes_written

    @property
    def released(self) -> bool:
        return self._handle is None

    def write_header(self, header: bytes) -> None:
        """Write the provisional header; it does not count as payload."""
        self._write(header, payload=False)

    def write(self, data: bytes) -> int:
        """Append payload bytes and return how many were written."""
        requested = self._bytes_written + len(data)
        if requested > self._max_payload:
            raise SizeLimitExceeded(requested, self._max_payload)
        return self._write(data, payload=True)

    def _write(self, data: bytes, payload: bool) -> int:
        handle = self._require_handle()
        what = "payload" if payload else "header"
        try:
            written = handle.write(data)
        except OSError as exc:
            # BlockingIOError reports partial progress before failing.
            if payload:
                self._bytes_written += getattr(exc, "characters_written", 0) or 0
            raise IoFailure(f"Failed to write {what} to {self._path}: {exc}", exc) from exc

        if payload:
            self._bytes_written += written
        if written < len(data):
            raise IoFailure(f"Short {what} write to {self._path}: {written} of {len(data)} bytes")
        return written

    def finalize(self, patches: Iterable[Patch]) -> None:
        """
        Apply positioned overwrites, then release the handle.

        The handle is released even when a patch fails; the first failure is
        raised afterwards.
        """
        handle = self._require_handle()
        self._handle = None
        failure: Optional[IoFailure] = None

        for offset, field in patches:
            try:
                written = handle.write_at(field, offset)
            except OSError as exc:
                failure = IoFailure(
                    f"Failed to patch header of {self._path} at offset {offset}: {exc}", exc
                )
                break
            if written < len(field):
                failure = IoFailure(
                    f"Short header patch of {self._path} at offset {offset}: "
                    f"{written} of {len(field)} bytes"
                )
                break

        self._release(handle, cleanup=failure is not None)
        if failure is not None:
            raise failure from failure.cause

    def abort(self) -> None:
        """Release the handle without patching anything."""
        handle = self._handle
        if handle is None:
            return
        self._handle = None
        self._release(handle, cleanup=True)

    def _release(self, handle: FileHandle, cleanup: bool) -> None:
        try:
            handle.close()
        except OSError as exc:
            if cleanup:
                logger.warning("Failed to release %s during cleanup: %s", self._path, exc)
                return
            raise IoFailure(f"Failed to close {self._path}: {exc}", exc) from exc

    def _require_handle(self) -> FileHandle:
        if self._handle is None:
            raise IoFailure(f"{self._path} has already been released")
        return self._handle
