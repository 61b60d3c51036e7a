from __future__ import annotations

import copy
from collections.abc import Callable
from pathlib import Path

import pytest

from docship.adapters.http import MockHttpClient
from docship.core.config import Config
from docship.core.result import Ok
from docship.output.console import MockConsole
from docship.tasks.context import TaskContext

_FULL_CONFIG: dict[str, dict[str, str]] = {
    "docfx": {
        "home": "docfx",
        "exe": "docfx/target/docfx.exe",
        "artifactsFolder": "artifacts",
        "targetFolder": "target",
        "docfxSeedHome": "docfx-seed",
        "e2eTestsHome": "e2e",
        "releaseNotePath": "RELEASENOTE.md",
        "releaseFolder": "release",
        "assetZipPath": "out/docfx.zip",
        "repoUrl": "https://github.com/dotnet/docfx",
        "siteFolder": "_site",
    },
    "firefox": {"version": "57.0"},
    "myget": {
        "exe": "nuget.exe",
        "apiKey": "configured",
        "devUrl": "https://myget.example/dev",
        "testUrl": "https://myget.example/test",
        "masterUrl": "https://myget.example/master",
    },
    "git": {"name": "DocFX CI", "email": "ci@example.com", "message": "Update gh-pages"},
    "choco": {
        "homeDir": "choco",
        "nuspec": "choco/docfx.nuspec",
        "chocoScript": "choco/tools/chocolateyinstall.ps1",
    },
}

FULL_ENV = {"MGAPIKEY": "myget-token", "TOKEN": "gh-token", "CHOCO_TOKEN": "choco-token"}


@pytest.fixture
def config_data() -> dict[str, dict[str, str]]:
    """A complete docship.json payload; tests delete or blank what they need."""
    return copy.deepcopy(_FULL_CONFIG)


MakeCtx = Callable[..., TaskContext]


@pytest.fixture
def make_ctx(tmp_path: Path, config_data: dict[str, dict[str, str]]) -> MakeCtx:
    def _make(
        data: dict[str, dict[str, str]] | None = None,
        env: dict[str, str] | None = None,
        http: MockHttpClient | None = None,
    ) -> TaskContext:
        result = Config.from_dict(data if data is not None else config_data)
        assert isinstance(result, Ok)
        return TaskContext(
            config=result.value,
            console=MockConsole(),
            env=dict(FULL_ENV) if env is None else env,
            cwd=tmp_path,
            http=http or MockHttpClient(),
        )

    return _make
