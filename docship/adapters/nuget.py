"""Publish NuGet packages to a MyGet feed."""

from __future__ import annotations

from pathlib import Path

from docship.core.result import Err, Ok, Result
from docship.core.task_errors import AdapterError
from docship.platform.process import run as run_process
from docship.release.notes import package_versions, read_latest

from .timeouts import PUSH_TIMEOUT_SECONDS

__all__ = ["find_packages", "publish_packages"]


def find_packages(artifacts_folder: Path, *, version: str | None = None) -> list[Path]:
    """List ``*.nupkg`` under the artifacts folder, symbol packages excluded.

    With ``version``, only packages stamped with that release version are kept.
    """
    packages = [
        p
        for p in sorted(artifacts_folder.rglob("*.nupkg"))
        if p.is_file() and not p.name.endswith(".symbols.nupkg")
    ]
    if version is None:
        return packages

    markers = tuple(f".{v}" for v in package_versions(version))
    return [p for p in packages if p.name.removesuffix(".nupkg").endswith(markers)]


def publish_packages(
    *,
    artifacts_folder: Path,
    nuget_exe: str,
    api_key: str,
    source_url: str,
    release_note_path: Path | None = None,
) -> Result[list[Path], AdapterError]:
    """Push every package in ``artifacts_folder`` to ``source_url``.

    When ``release_note_path`` is given, only the packages of the release it
    announces are pushed.

    Returns:
        Ok(pushed packages), or Err on the first push that fails.
    """
    if not artifacts_folder.is_dir():
        return Err(
            AdapterError(
                step="nuget push",
                message=f"artifacts folder not found: {artifacts_folder}",
                kind="io",
            )
        )

    version: str | None = None
    if release_note_path is not None:
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
        version = note.value.version

    packages = find_packages(artifacts_folder, version=version)
    if not packages:
        suffix = f" for version {version}" if version else ""
        return Err(
            AdapterError(
                step="nuget push",
                message=f"no packages found in {artifacts_folder}{suffix}",
                kind="io",
            )
        )

    for package in packages:
        result = run_process(
            [nuget_exe, "push", str(package), api_key, "-Source", source_url],
            cwd=artifacts_folder,
            timeout=PUSH_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(
                AdapterError(
                    step="nuget push",
                    message=f"failed to push {package.name}",
                    detail=result.error.stderr.strip() or str(result.error),
                )
            )

    return Ok(packages)
