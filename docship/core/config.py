"""Typed configuration loading.

``docship.json`` holds one object per concern. Every section must be present;
individual values are optional at load time and checked by each task right
before it runs (see ``docship.core.guard``).

    {
        "docfx": {"home": "../..", "artifactsFolder": "../../artifacts", ...},
        "firefox": {"version": "57.0"},
        "myget": {"exe": "nuget.exe", "apiKey": "...", "devUrl": "...", ...},
        "git": {"name": "DocFX CI", "email": "ci@docfx", "message": "Update gh-pages"},
        "choco": {"homeDir": "choco", "nuspec": "choco/docfx.nuspec", ...}
    }
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import JsonObject, as_json_object, get_object, get_str

__all__ = [
    "CONFIG_FILENAME",
    "SECTIONS",
    "ChocoConfig",
    "Config",
    "ConfigError",
    "DocfxConfig",
    "FirefoxConfig",
    "GitConfig",
    "MygetConfig",
    "load_config",
]

CONFIG_FILENAME = "docship.json"

SECTIONS = ("docfx", "firefox", "myget", "git", "choco")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the config file cannot be loaded or is missing a section."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class DocfxConfig:
    """Locations of the docfx checkout, its outputs and release inputs."""

    home: str | None = None
    exe: str | None = None
    artifacts_folder: str | None = None
    target_folder: str | None = None
    docfx_seed_home: str | None = None
    e2e_tests_home: str | None = None
    release_note_path: str | None = None
    release_folder: str | None = None
    asset_zip_path: str | None = None
    repo_url: str | None = None
    site_folder: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> DocfxConfig:
        return cls(
            home=get_str(data, "home"),
            exe=get_str(data, "exe"),
            artifacts_folder=get_str(data, "artifactsFolder"),
            target_folder=get_str(data, "targetFolder"),
            docfx_seed_home=get_str(data, "docfxSeedHome"),
            e2e_tests_home=get_str(data, "e2eTestsHome"),
            release_note_path=get_str(data, "releaseNotePath"),
            release_folder=get_str(data, "releaseFolder"),
            asset_zip_path=get_str(data, "assetZipPath"),
            repo_url=get_str(data, "repoUrl"),
            site_folder=get_str(data, "siteFolder"),
        )


@dataclass(frozen=True, slots=True)
class FirefoxConfig:
    """Browser pinned for the E2E tests."""

    version: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> FirefoxConfig:
        return cls(version=get_str(data, "version"))


@dataclass(frozen=True, slots=True)
class MygetConfig:
    """NuGet client and MyGet feed URLs."""

    exe: str | None = None
    api_key: str | None = None
    dev_url: str | None = None
    test_url: str | None = None
    master_url: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> MygetConfig:
        return cls(
            exe=get_str(data, "exe"),
            api_key=get_str(data, "apiKey"),
            dev_url=get_str(data, "devUrl"),
            test_url=get_str(data, "testUrl"),
            master_url=get_str(data, "masterUrl"),
        )


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Committer identity used when pushing gh-pages."""

    name: str | None = None
    email: str | None = None
    message: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> GitConfig:
        return cls(
            name=get_str(data, "name"),
            email=get_str(data, "email"),
            message=get_str(data, "message"),
        )


@dataclass(frozen=True, slots=True)
class ChocoConfig:
    """Chocolatey package sources."""

    home_dir: str | None = None
    nuspec: str | None = None
    choco_script: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ChocoConfig:
        return cls(
            home_dir=get_str(data, "homeDir"),
            nuspec=get_str(data, "nuspec"),
            choco_script=get_str(data, "chocoScript"),
        )


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container. Read-only once loaded."""

    docfx: DocfxConfig
    firefox: FirefoxConfig
    myget: MygetConfig
    git: GitConfig
    choco: ChocoConfig

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Result[Config, ConfigError]:
        """Build a Config, failing on the first missing section."""
        tables: dict[str, JsonObject] = {}
        for section in SECTIONS:
            table = get_object(data, section)
            if table is None:
                return Err(ConfigError(f"Can't find {section} configuration (config.{section})."))
            tables[section] = table

        return Ok(
            cls(
                docfx=DocfxConfig.from_dict(tables["docfx"]),
                firefox=FirefoxConfig.from_dict(tables["firefox"]),
                myget=MygetConfig.from_dict(tables["myget"]),
                git=GitConfig.from_dict(tables["git"]),
                choco=ChocoConfig.from_dict(tables["choco"]),
            )
        )


def _parse_json(path: Path) -> Result[JsonObject, ConfigError]:
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ConfigError(f"Can't find config file: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    try:
        data_obj: object = json.loads(content)
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"Invalid JSON syntax: {e}", path=path))

    data = as_json_object(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a JSON object", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a JSON file.

    Args:
        path: Path to docship.json

    Returns:
        Ok(Config) on success, Err(ConfigError) when the file is absent,
        malformed, or lacks one of the top-level sections.
    """
    result = _parse_json(path)
    if isinstance(result, Err):
        return result

    config = Config.from_dict(result.value)
    if isinstance(config, Err):
        return Err(ConfigError(config.error.message, path=path))
    return config
