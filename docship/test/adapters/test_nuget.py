from __future__ import annotations

from pathlib import Path

import pytest

from docship.adapters import nuget as nuget_mod
from docship.core.result import Err, Ok
from docship.platform.process import ProcessError

RELEASENOTE = "v2.41\n-----\n1. Notes.\n"


def _artifacts(tmp_path: Path) -> Path:
    folder = tmp_path / "artifacts"
    (folder / "Release").mkdir(parents=True)
    for name in (
        "docfx.console.2.41.0.nupkg",
        "docfx.console.2.41.0.symbols.nupkg",
        "docfx.console.2.40.5.nupkg",
        "Microsoft.DocAsCode.App.2.41.0.nupkg",
    ):
        (folder / "Release" / name).write_bytes(b"pkg")
    return folder


class _FakeRun:
    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[list[str]] = []
        self.fail_on = fail_on

    def __call__(self, cmd: list[str], cwd: Path, *, timeout: float | None = None):
        del cwd, timeout
        self.calls.append(cmd)
        if self.fail_on and self.fail_on in cmd[2]:
            return Err(ProcessError(tuple(cmd), 1, "", "Response status code 409 (Conflict)"))
        return Ok("")


def test_find_packages_skips_symbols(tmp_path: Path) -> None:
    names = [p.name for p in nuget_mod.find_packages(_artifacts(tmp_path))]
    assert names == [
        "Microsoft.DocAsCode.App.2.41.0.nupkg",
        "docfx.console.2.40.5.nupkg",
        "docfx.console.2.41.0.nupkg",
    ]


@pytest.mark.parametrize("version", ["2.41", "2.41.0"])
def test_find_packages_for_release_version(tmp_path: Path, version: str) -> None:
    names = [p.name for p in nuget_mod.find_packages(_artifacts(tmp_path), version=version)]
    assert names == ["Microsoft.DocAsCode.App.2.41.0.nupkg", "docfx.console.2.41.0.nupkg"]


def test_publish_pushes_every_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _FakeRun()
    monkeypatch.setattr(nuget_mod, "run_process", fake)

    result = nuget_mod.publish_packages(
        artifacts_folder=_artifacts(tmp_path),
        nuget_exe="nuget.exe",
        api_key="token",
        source_url="https://myget.example/dev",
    )

    assert isinstance(result, Ok)
    assert len(result.value) == 3
    assert fake.calls[0][:2] == ["nuget.exe", "push"]
    assert fake.calls[0][3:] == ["token", "-Source", "https://myget.example/dev"]


def test_publish_with_release_notes_filters(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    fake = _FakeRun()
    monkeypatch.setattr(nuget_mod, "run_process", fake)
    notes = tmp_path / "RELEASENOTE.md"
    notes.write_text(RELEASENOTE, encoding="utf-8")

    result = nuget_mod.publish_packages(
        artifacts_folder=_artifacts(tmp_path),
        nuget_exe="nuget.exe",
        api_key="token",
        source_url="https://myget.example/master",
        release_note_path=notes,
    )

    assert isinstance(result, Ok)
    assert all("2.41.0" in Path(cmd[2]).name for cmd in fake.calls)
    assert len(fake.calls) == 2


def test_publish_stops_on_first_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _FakeRun(fail_on="Microsoft.DocAsCode")
    monkeypatch.setattr(nuget_mod, "run_process", fake)

    result = nuget_mod.publish_packages(
        artifacts_folder=_artifacts(tmp_path),
        nuget_exe="nuget.exe",
        api_key="token",
        source_url="https://myget.example/dev",
    )

    assert isinstance(result, Err)
    assert "Microsoft.DocAsCode.App.2.41.0.nupkg" in result.error.message
    assert result.error.detail == "Response status code 409 (Conflict)"
    assert len(fake.calls) == 1


def test_publish_without_packages(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _FakeRun()
    monkeypatch.setattr(nuget_mod, "run_process", fake)
    (tmp_path / "artifacts").mkdir()

    result = nuget_mod.publish_packages(
        artifacts_folder=tmp_path / "artifacts",
        nuget_exe="nuget.exe",
        api_key="token",
        source_url="https://myget.example/dev",
    )

    assert isinstance(result, Err)
    assert result.error.kind == "io"
    assert fake.calls == []


def test_publish_missing_release_notes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    fake = _FakeRun()
    monkeypatch.setattr(nuget_mod, "run_process", fake)

    result = nuget_mod.publish_packages(
        artifacts_folder=_artifacts(tmp_path),
        nuget_exe="nuget.exe",
        api_key="token",
        source_url="https://myget.example/master",
        release_note_path=tmp_path / "RELEASENOTE.md",
    )

    assert isinstance(result, Err)
    assert result.error.kind == "release_note"
    assert fake.calls == []
