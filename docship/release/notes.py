"""RELEASENOTE.md parsing.

docfx keeps one markdown file with the newest release on top:

    Version Notes (Current Version: v2.41)
    =======================================

    v2.41
    -----
    1. Support `toc.yml` includes.
    2. Bug fixes.

    v2.40.5
    -------
    ...

Each entry is a ``v<version>`` line followed by a ``---`` underline. The
GitHub release, the Chocolatey package and the master MyGet push all take
their version from the first entry.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from docship.core.result import Err, Ok, Result

__all__ = [
    "ReleaseNote",
    "ReleaseNoteError",
    "package_versions",
    "parse_latest",
    "read_latest",
]

_VERSION_RE = re.compile(r"^v(\d+(?:\.\d+)*)\s*$")
_UNDERLINE_RE = re.compile(r"^-{3,}\s*$")


@dataclass(frozen=True, slots=True)
class ReleaseNote:
    version: str
    description: str

    @property
    def tag(self) -> str:
        return f"v{self.version}"


@dataclass(frozen=True, slots=True)
class ReleaseNoteError:
    message: str
    path: Path | None = None


def _is_header(lines: list[str], i: int) -> bool:
    return (
        i + 1 < len(lines)
        and _VERSION_RE.match(lines[i].strip()) is not None
        and _UNDERLINE_RE.match(lines[i + 1].strip()) is not None
    )


def parse_latest(text: str) -> Result[ReleaseNote, ReleaseNoteError]:
    """Return the newest entry of a release note document."""
    lines = text.splitlines()
    start = next((i for i in range(len(lines)) if _is_header(lines, i)), None)
    if start is None:
        return Err(ReleaseNoteError("no version entry found in release notes"))

    match = _VERSION_RE.match(lines[start].strip())
    assert match is not None
    version = match.group(1)

    body: list[str] = []
    for i in range(start + 2, len(lines)):
        if _is_header(lines, i):
            break
        body.append(lines[i])

    return Ok(ReleaseNote(version=version, description="\n".join(body).strip()))


def package_versions(version: str) -> tuple[str, ...]:
    """Forms a release version takes in package file names.

    nuget and choco pad versions to at least three parts when packing, so
    release "2.41" ships as ``docfx.2.41.0.nupkg``.
    """
    parts = version.split(".")
    forms = [version]
    while len(parts) < 3:
        parts.append("0")
        forms.append(".".join(parts))
    return tuple(forms)


def read_latest(path: Path) -> Result[ReleaseNote, ReleaseNoteError]:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        return Err(ReleaseNoteError(f"failed to read release notes: {e}", path=path))

    result = parse_latest(text)
    if isinstance(result, Err):
        return Err(ReleaseNoteError(result.error.message, path=path))
    return result
