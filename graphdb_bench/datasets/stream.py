r"""
Re-openable byte streams over dataset files.

A dataset may be stored as one file or, when it is too large for a
single file, as ``<path>.1`` and ``<path>.2`` which are read back to back.

    from graphdb_bench.datasets.stream import validate_readable_file_stream

    dataset = validate_readable_file_stream("data/network.txt", "dataset")
    with dataset() as stream:
        header = stream.read(64)
"""

import io
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, BinaryIO

from graphdb_bench.errors import ConfigurationError, DatasetOpenError

__all__ = ["FileStreamFactory", "StreamFactory", "validate_readable_file_stream"]

logger = logging.getLogger(__name__)

StreamFactory = Callable[[], BinaryIO]


class _ConcatenatedStream(io.RawIOBase):
    """Raw stream reading several open files one after the other."""

    def __init__(self, parts: Sequence[BinaryIO]) -> None:
        self._parts = list(parts)
        self._index = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:  # type: ignore[override]
        while self._index < len(self._parts):
            count = self._parts[self._index].readinto(buffer)  # type: ignore[attr-defined]
            if count:
                return count
            self._index += 1
        return 0

    def close(self) -> None:
        if not self.closed:
            for part in self._parts:
                part.close()
        super().close()


class FileStreamFactory:
    """Opens a fresh binary stream over one or more files on every call.

    Each call returns independent handles, so the same dataset can be
    read any number of times.
    """

    def __init__(self, paths: Sequence[Path]) -> None:
        if not paths:
            msg = "at least one path is required"
            raise ValueError(msg)
        self._paths = tuple(paths)

    @property
    def paths(self) -> tuple[Path, ...]:
        return self._paths

    @property
    def is_split(self) -> bool:
        return len(self._paths) > 1

    def __call__(self) -> BinaryIO:
        opened: list[BinaryIO] = []
        for path in self._paths:
            try:
                opened.append(path.open("rb"))
            except OSError as e:
                for handle in opened:
                    handle.close()
                raise DatasetOpenError(str(path)) from e

        if len(opened) == 1:
            return opened[0]
        return io.BufferedReader(_ConcatenatedStream(opened))  # type: ignore[return-value]

    def __repr__(self) -> str:
        joined = " + ".join(str(p) for p in self._paths)
        return f"<FileStreamFactory {joined}>"


def _is_readable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def validate_readable_file_stream(
    filename: str | Path,
    field: str,
    *,
    key: str | None = None,
) -> FileStreamFactory:
    """Validate a dataset path and return a factory for reading it.

    Args:
        filename: Path to the file. When it does not exist, the parts
            ``<filename>.1`` and ``<filename>.2`` are used instead.
        field: Configuration key naming the file, used in error messages.
        key: Fully qualified key stored on ConfigurationError.field;
            defaults to ``field``.

    Returns:
        Factory opening a new stream over the file (or both parts) per call.

    Raises:
        ConfigurationError: If neither the file nor both parts are readable.
    """
    path = Path(filename)
    if not path.exists():
        part1 = Path(f"{path}.1")
        part2 = Path(f"{path}.2")
        if _is_readable_file(part1) and _is_readable_file(part2):
            logger.debug("Reading %s from split files %s and %s", field, part1, part2)
            return FileStreamFactory([part1, part2])
        msg = f"the {field} does not exist"
        raise ConfigurationError(msg, field=key or field)

    if not _is_readable_file(path):
        msg = f"the {field} must be a file that this user can read"
        raise ConfigurationError(msg, field=key or field)

    return FileStreamFactory([path])
