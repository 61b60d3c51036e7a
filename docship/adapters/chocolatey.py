"""Publish the release zip to chocolatey.org.

The package sources live in ``choco.homeDir``: a nuspec and a
``chocolateyinstall.ps1`` that downloads the GitHub release asset. Before
packing, both are stamped with the newest release:

    $url      = 'https://github.com/dotnet/docfx/releases/download/v2.41/docfx.zip'
    $checksum = '<sha256 of docfx.zip>'

    <version>2.41</version>
    <releaseNotes>...</releaseNotes>
"""

from __future__ import annotations

import re
from pathlib import Path
from xml.sax.saxutils import escape

from docship.core.result import Err, Ok, Result
from docship.core.task_errors import AdapterError
from docship.platform.files import sha256_file
from docship.platform.process import run as run_process
from docship.release.notes import ReleaseNote, package_versions, read_latest

from .timeouts import PACK_TIMEOUT_SECONDS, PUSH_TIMEOUT_SECONDS

__all__ = [
    "CHOCOLATEY_PUSH_SOURCE",
    "publish_to_chocolatey",
    "stamp_install_script",
    "stamp_nuspec",
]

CHOCOLATEY_PUSH_SOURCE = "https://push.chocolatey.org/"

_URL_TAG_RE = re.compile(r"(/releases/download/)v[^/'\"]+(/)")
_CHECKSUM_RE = re.compile(r"^(\s*\$checksum\s*=\s*)(['\"]).*?\2", re.MULTILINE)
_VERSION_RE = re.compile(r"<version>.*?</version>", re.DOTALL)
_NOTES_RE = re.compile(r"<releaseNotes>.*?</releaseNotes>", re.DOTALL)


def stamp_install_script(text: str, *, tag: str, checksum: str) -> str:
    """Point the download url at ``tag`` and update the checksum."""
    text = _URL_TAG_RE.sub(lambda m: f"{m.group(1)}{tag}{m.group(2)}", text)
    return _CHECKSUM_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}{checksum}{m.group(2)}", text)


def stamp_nuspec(text: str, *, note: ReleaseNote) -> str:
    """Set the package version and release notes."""
    text = _VERSION_RE.sub(f"<version>{note.version}</version>", text, count=1)
    notes = escape(note.description)
    return _NOTES_RE.sub(lambda _: f"<releaseNotes>{notes}</releaseNotes>", text, count=1)


def _io_error(step: str, path: Path, e: OSError) -> Err[AdapterError]:
    return Err(AdapterError(step=step, message=f"{e}", kind="io", detail=str(path)))


def _stamp_sources(
    *, choco_script: Path, nuspec: Path, note: ReleaseNote, checksum: str
) -> Result[None, AdapterError]:
    try:
        script = choco_script.read_text(encoding="utf-8")
        choco_script.write_text(
            stamp_install_script(script, tag=note.tag, checksum=checksum), encoding="utf-8"
        )
    except OSError as e:
        return _io_error("stamp install script", choco_script, e)

    try:
        spec = nuspec.read_text(encoding="utf-8")
        nuspec.write_text(stamp_nuspec(spec, note=note), encoding="utf-8")
    except OSError as e:
        return _io_error("stamp nuspec", nuspec, e)

    return Ok(None)


def _find_package(home_dir: Path, note: ReleaseNote) -> Path | None:
    for version in package_versions(note.version):
        candidates = sorted(home_dir.glob(f"*.{version}.nupkg"))
        if candidates:
            return candidates[0]
    return None


def publish_to_chocolatey(
    *,
    release_note_path: Path,
    asset_zip_path: Path,
    choco_script: Path,
    nuspec: Path,
    home_dir: Path,
    token: str,
) -> Result[Path, AdapterError]:
    """Stamp, pack and push the chocolatey package for the newest release.

    Returns:
        Ok(path of the pushed .nupkg).
    """
    note = read_latest(release_note_path)
    if isinstance(note, Err):
        return Err(
            AdapterError(
                step="read release notes",
                message=note.error.message,
                kind="release_note",
                detail=str(release_note_path),
            )
        )

    checksum = sha256_file(asset_zip_path)
    if isinstance(checksum, Err):
        return Err(
            AdapterError(
                step="hash release zip",
                message=checksum.error.message,
                kind="io",
                detail=str(asset_zip_path),
            )
        )

    stamped = _stamp_sources(
        choco_script=choco_script, nuspec=nuspec, note=note.value, checksum=checksum.value
    )
    if isinstance(stamped, Err):
        return stamped

    packed = run_process(
        ["choco", "pack", str(nuspec), "--outputdirectory", str(home_dir)],
        cwd=home_dir,
        timeout=PACK_TIMEOUT_SECONDS,
    )
    if isinstance(packed, Err):
        return Err(
            AdapterError(
                step="choco pack",
                message=str(packed.error),
                detail=packed.error.stdout.strip() or packed.error.stderr.strip() or None,
            )
        )

    package = _find_package(home_dir, note.value)
    if package is None:
        return Err(
            AdapterError(
                step="choco pack",
                message=f"no package for version {note.value.version} in {home_dir}",
                kind="io",
            )
        )

    pushed = run_process(
        ["choco", "push", str(package), "--api-key", token, "--source", CHOCOLATEY_PUSH_SOURCE],
        cwd=home_dir,
        timeout=PUSH_TIMEOUT_SECONDS,
    )
    if isinstance(pushed, Err):
        return Err(
            AdapterError(
                step="choco push",
                message=f"failed to push {package.name} (exit {pushed.error.returncode})",
                detail=pushed.error.stdout.strip() or pushed.error.stderr.strip() or None,
            )
        )

    return Ok(package)
