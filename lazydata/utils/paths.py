"""Filesystem helpers for writing generated documents."""

# Module responsibilities:
# - Resolve caller-supplied output paths and create parent folders on demand.
# - Write documents atomically through a sibling temporary file that is always cleaned up.

from __future__ import annotations

import os
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Union

PathLike = Union[str, os.PathLike]


def resolve_output_path(path: PathLike) -> Path:
    """Expand the output path and ensure its parent directory exists.

    Args:
        path: Destination requested by the caller.

    Returns:
        Absolute path of the destination file.
    """

    target = Path(path).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    return target


def _tmp_path(path: Path) -> Path:
    return path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")


@contextmanager
def scratch_file(path: Path) -> Iterator[Path]:
    """Yield a temporary sibling of *path* that is removed when the block exits."""

    tmp_path = _tmp_path(path)
    try:
        yield tmp_path
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def atomic_write(path: PathLike, render: Callable[[BinaryIO], None]) -> Path:
    """Write a document to *path*, replacing any existing file.

    ``render`` receives an open binary handle on a temporary file. The file is
    moved over the destination only after ``render`` returns; on failure the
    destination is untouched and the temporary file is deleted.

    Returns:
        The absolute destination path.
    """

    target = resolve_output_path(path)
    with scratch_file(target) as tmp_path:
        with tmp_path.open("wb") as fh:
            render(fh)
        os.replace(tmp_path, target)
    return target
