"""Task bodies.

Every task follows the same shape: check the values it needs (nothing has
happened yet if one is missing), then make exactly one adapter call.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Literal

from docship.adapters import chocolatey, github, nuget
from docship.adapters.timeouts import (
    BUILD_TIMEOUT_SECONDS,
    INSTALL_TIMEOUT_SECONDS,
    TEST_TIMEOUT_SECONDS,
)
from docship.core.guard import require, require_all
from docship.core.result import Err, Ok, Result
from docship.core.task_errors import AdapterError, TaskError
from docship.output.console import Style
from docship.platform.files import remove_paths
from docship.platform.process import run_silent

from .context import TaskContext

__all__ = [
    "build",
    "clean",
    "install_firefox",
    "build_seed",
    "restore_e2e_tests",
    "run_e2e_tests",
    "publish_myget",
    "update_gh_page",
    "publish_gh_release",
    "publish_chocolatey",
]

Feed = Literal["dev", "test", "master"]


def _run_tool(
    cmd: list[str],
    *,
    cwd: Path,
    step: str,
    timeout: float | None,
) -> Result[None, TaskError]:
    result = run_silent(cmd, cwd=cwd, timeout=timeout)
    if isinstance(result, Err):
        return Err(
            AdapterError(
                step=step,
                message=str(result.error),
                detail=result.error.stderr.strip() or None,
            )
        )
    return Ok(None)


def _failed(prefix: str, error: AdapterError) -> Err[TaskError]:
    return Err(replace(error, message=f"{prefix}, {error.message}"))


def build(ctx: TaskContext) -> Result[None, TaskError]:
    home = require(
        ctx.config.docfx.home,
        "config.docfx.home",
        "Can't find docfx home directory in configuration.",
    )
    if isinstance(home, Err):
        return home

    return _run_tool(
        ["powershell", "./build.ps1", "-prod"],
        cwd=ctx.resolve(home.value),
        step="build",
        timeout=BUILD_TIMEOUT_SECONDS,
    )


def clean(ctx: TaskContext) -> Result[None, TaskError]:
    checked = require_all(
        require(
            ctx.config.docfx.artifacts_folder,
            "config.docfx.artifactsFolder",
            "Can't find docfx artifacts folder in configuration.",
        ),
        require(
            ctx.config.docfx.target_folder,
            "config.docfx.targetFolder",
            "Can't find docfx target folder in configuration.",
        ),
    )
    if isinstance(checked, Err):
        return checked
    artifacts_folder, target_folder = checked.value

    removed = remove_paths([ctx.resolve(artifacts_folder), ctx.resolve(target_folder)])
    if isinstance(removed, Err):
        return Err(
            AdapterError(
                step="clean",
                message=removed.error.message,
                kind="io",
                detail=str(removed.error.path),
            )
        )

    if not removed.value:
        ctx.console.print("Folders not exist, no need to clean.", Style.DIM)
    else:
        ctx.console.print("Deleted:")
        for path in removed.value:
            ctx.console.print(f"  {path}", Style.DIM)
    return Ok(None)


def install_firefox(ctx: TaskContext) -> Result[None, TaskError]:
    version = require(
        ctx.config.firefox.version,
        "config.firefox.version",
        "Can't find firefox version in configuration.",
    )
    if isinstance(version, Err):
        return version

    return _run_tool(
        ["choco", "install", "firefox", f"--version={version.value}", "-y"],
        cwd=ctx.cwd,
        step="install firefox",
        timeout=INSTALL_TIMEOUT_SECONDS,
    )


def build_seed(ctx: TaskContext) -> Result[None, TaskError]:
    checked = require_all(
        require(ctx.config.docfx.exe, "config.docfx.exe", "Can't find docfx.exe in configuration."),
        require(
            ctx.config.docfx.docfx_seed_home,
            "config.docfx.docfxSeedHome",
            "Can't find docfx-seed in configuration.",
        ),
    )
    if isinstance(checked, Err):
        return checked
    exe, seed_home = checked.value

    return _run_tool(
        [str(ctx.resolve(exe)), "docfx.json"],
        cwd=ctx.resolve(seed_home),
        step="build docfx-seed",
        timeout=BUILD_TIMEOUT_SECONDS,
    )


def _e2e_home(ctx: TaskContext) -> Result[str, TaskError]:
    return require(
        ctx.config.docfx.e2e_tests_home,
        "config.docfx.e2eTestsHome",
        "Can't find E2ETest directory in configuration.",
    )


def restore_e2e_tests(ctx: TaskContext) -> Result[None, TaskError]:
    home = _e2e_home(ctx)
    if isinstance(home, Err):
        return home

    return _run_tool(
        ["dotnet", "restore"],
        cwd=ctx.resolve(home.value),
        step="restore e2e tests",
        timeout=INSTALL_TIMEOUT_SECONDS,
    )


def run_e2e_tests(ctx: TaskContext) -> Result[None, TaskError]:
    home = _e2e_home(ctx)
    if isinstance(home, Err):
        return home

    return _run_tool(
        ["dotnet", "test"],
        cwd=ctx.resolve(home.value),
        step="run e2e tests",
        timeout=TEST_TIMEOUT_SECONDS,
    )


def publish_myget(ctx: TaskContext, feed: Feed) -> Result[None, TaskError]:
    """Push the build artifacts to one of the MyGet feeds.

    The token always comes from ``MGAPIKEY``. The master feed only receives
    the packages of the release announced in RELEASENOTE.md.
    """
    docfx = ctx.config.docfx
    myget = ctx.config.myget
    feed_url = {"dev": myget.dev_url, "test": myget.test_url, "master": myget.master_url}[feed]

    checks = [
        require(
            docfx.artifacts_folder,
            "config.docfx.artifactsFolder",
            "Can't find artifacts folder in configuration.",
        ),
        require(myget.exe, "config.myget.exe", "Can't find nuget command in configuration."),
        require(myget.api_key, "config.myget.apiKey", "Can't find myget api key in configuration."),
        require(
            feed_url,
            f"config.myget.{feed}Url",
            f"Can't find myget url for docfx {feed} feed in configuration.",
        ),
        require(
            ctx.env.get("MGAPIKEY"),
            "env.MGAPIKEY",
            "Can't find myget key in Environment Variables.",
        ),
    ]
    if feed == "master":
        checks.append(
            require(
                docfx.release_note_path,
                "config.docfx.releaseNotePath",
                "Can't find RELEASENOTE.md in configuration.",
            )
        )

    checked = require_all(*checks)
    if isinstance(checked, Err):
        return checked
    artifacts_folder, nuget_exe, _, url, token, *rest = checked.value

    pushed = nuget.publish_packages(
        artifacts_folder=ctx.resolve(artifacts_folder),
        nuget_exe=nuget_exe,
        api_key=token,
        source_url=url,
        release_note_path=ctx.resolve(rest[0]) if rest else None,
    )
    if isinstance(pushed, Err):
        return pushed

    for package in pushed.value:
        ctx.console.print(f"  pushed {package.name}", Style.DIM)
    return Ok(None)


def update_gh_page(ctx: TaskContext) -> Result[None, TaskError]:
    checked = require_all(
        require(
            ctx.config.docfx.repo_url,
            "config.docfx.repoUrl",
            "Can't find docfx repo url in configuration.",
        ),
        require(
            ctx.config.docfx.site_folder,
            "config.docfx.siteFolder",
            "Can't find docfx site folder in configuration.",
        ),
        require(ctx.config.git.name, "config.git.name", "Can't find git user name in configuration"),
        require(
            ctx.config.git.email, "config.git.email", "Can't find git user email in configuration"
        ),
        require(
            ctx.config.git.message,
            "config.git.message",
            "Can't find git commit message in configuration",
        ),
    )
    if isinstance(checked, Err):
        return checked
    repo_url, site_folder, name, email, message = checked.value

    updated = github.update_gh_pages(
        repo_url=repo_url,
        site_folder=ctx.resolve(site_folder),
        user_name=name,
        user_email=email,
        message=message,
    )
    if isinstance(updated, Err):
        return _failed("Failed to update github pages", updated.error)

    if updated.value:
        ctx.console.success("Update github pages successfully.")
    else:
        ctx.console.info("Github pages already up to date.")
    return Ok(None)


def publish_gh_release(ctx: TaskContext) -> Result[None, TaskError]:
    checked = require_all(
        require(
            ctx.config.docfx.release_note_path,
            "config.docfx.releaseNotePath",
            "Can't find RELEASENOTE.md in configuration.",
        ),
        require(
            ctx.config.docfx.release_folder,
            "config.docfx.releaseFolder",
            "Can't find zip source folder in configuration.",
        ),
        require(
            ctx.config.docfx.asset_zip_path,
            "config.docfx.assetZipPath",
            "Can't find asset zip destination folder in configuration.",
        ),
        require(
            ctx.config.docfx.repo_url,
            "config.docfx.repoUrl",
            "Can't find docfx repo url in configuration.",
        ),
        require(ctx.env.get("TOKEN"), "env.TOKEN", "No github account token in the environment."),
    )
    if isinstance(checked, Err):
        return checked
    release_note_path, release_folder, asset_zip_path, repo_url, token = checked.value

    released = github.create_release(
        http=ctx.http,
        repo_url=repo_url,
        release_note_path=ctx.resolve(release_note_path),
        release_folder=ctx.resolve(release_folder),
        asset_zip_path=ctx.resolve(asset_zip_path),
        token=token,
    )
    if isinstance(released, Err):
        return _failed("Failed to update github release and assets", released.error)

    ctx.console.success("Update github release and assets successfully.")
    ctx.console.print(f"  {released.value}", Style.DIM)
    return Ok(None)


def publish_chocolatey(ctx: TaskContext) -> Result[None, TaskError]:
    checked = require_all(
        require(
            ctx.config.choco.home_dir,
            "config.choco.homeDir",
            "Can't find homedir for chocolatey in configuration.",
        ),
        require(
            ctx.config.choco.nuspec,
            "config.choco.nuspec",
            "Can't find nuspec for chocolatey in configuration.",
        ),
        require(
            ctx.config.choco.choco_script,
            "config.choco.chocoScript",
            "Can't find script for chocolatey in configuration.",
        ),
        require(
            ctx.config.docfx.release_note_path,
            "config.docfx.releaseNotePath",
            "Can't find RELEASENOTE path in configuration.",
        ),
        require(
            ctx.config.docfx.asset_zip_path,
            "config.docfx.assetZipPath",
            "Can't find released zip path in configuration.",
        ),
        require(
            ctx.env.get("CHOCO_TOKEN"),
            "env.CHOCO_TOKEN",
            "No chocolatey.org account token in the environment.",
        ),
    )
    if isinstance(checked, Err):
        return checked
    home_dir, nuspec, choco_script, release_note_path, asset_zip_path, token = checked.value

    published = chocolatey.publish_to_chocolatey(
        release_note_path=ctx.resolve(release_note_path),
        asset_zip_path=ctx.resolve(asset_zip_path),
        choco_script=ctx.resolve(choco_script),
        nuspec=ctx.resolve(nuspec),
        home_dir=ctx.resolve(home_dir),
        token=token,
    )
    if isinstance(published, Err):
        return _failed("Failed to publish to chocolatey", published.error)

    ctx.console.success("Publish to chocolatey successfully.")
    return Ok(None)
