"""Filesystem helpers: cleanup, archiving, checksums and tree copies."""

from __future__ import annotations

import hashlib
import os
import shutil
import stat
import zipfile
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from docship.core.result import Err, Ok, Result

__all__ = [
    "FileError",
    "copy_tree_contents",
    "remove_paths",
    "sha256_file",
    "zip_directory",
]

_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True, slots=True)
class FileError:
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.path})"


def _remove_readonly(_func: Callable[[str], object], path: str, exc: BaseException) -> None:
    """Handle read-only files on Windows (e.g. .git/objects/pack/*.idx)."""
    if isinstance(exc, PermissionError):
        os.chmod(path, stat.S_IWRITE)
        os.unlink(path)
    else:
        raise exc


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path, onexc=_remove_readonly)
    else:
        path.unlink()


def remove_paths(paths: Iterable[Path]) -> Result[list[Path], FileError]:
    """Delete files and directories, returning what was actually removed.

    Paths that do not exist are skipped; an empty result is not an error.
    """
    removed: list[Path] = []
    for path in paths:
        if not path.exists() and not path.is_symlink():
            continue
        try:
            _remove(path)
        except OSError as e:
            return Err(FileError(path=path, message=f"failed to remove: {e}"))
        removed.append(path)
    return Ok(removed)


def zip_directory(source: Path, dest: Path) -> Result[Path, FileError]:
    """Archive the contents of ``source`` into ``dest`` (overwriting it).

    Entries are stored relative to ``source``, so the archive unpacks
    without an extra top-level folder.
    """
    if not source.is_dir():
        return Err(FileError(path=source, message="zip source folder not found"))

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(dest, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for file in sorted(source.rglob("*")):
                if file.is_file() and file.resolve() != dest.resolve():
                    zf.write(file, file.relative_to(source).as_posix())
    except OSError as e:
        return Err(FileError(path=dest, message=f"failed to write zip: {e}"))
    return Ok(dest)


def sha256_file(path: Path) -> Result[str, FileError]:
    """Hex SHA-256 of a file."""
    digest = hashlib.sha256()
    try:
        with path.open("rb") as handle:
            while chunk := handle.read(_CHUNK_SIZE):
                digest.update(chunk)
    except OSError as e:
        return Err(FileError(path=path, message=f"failed to hash: {e}"))
    return Ok(digest.hexdigest())


def copy_tree_contents(
    source: Path,
    dest: Path,
    *,
    keep: frozenset[str] = frozenset({".git"}),
) -> Result[None, FileError]:
    """Replace everything in ``dest`` (except names in ``keep``) with ``source``'s content."""
    if not source.is_dir():
        return Err(FileError(path=source, message="source folder not found"))

    try:
        for child in dest.iterdir():
            if child.name in keep:
                continue
            _remove(child)
        shutil.copytree(source, dest, dirs_exist_ok=True)
    except OSError as e:
        return Err(FileError(path=dest, message=f"failed to copy tree: {e}"))
    return Ok(None)
