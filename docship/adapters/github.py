"""GitHub Pages and GitHub release publishing.

Pages are updated through plain git (clone the ``gh-pages`` branch, replace
its content, commit, push). Releases go through the REST API:

    POST /repos/{owner}/{repo}/releases           -> release with upload_url
    POST {upload_url}?name=<asset>.zip            -> attached archive
"""

from __future__ import annotations

import re
import tempfile
from collections.abc import Mapping
from pathlib import Path
from urllib.parse import quote

from docship.core.result import Err, Ok, Result
from docship.core.task_errors import AdapterError
from docship.platform.files import copy_tree_contents, zip_directory
from docship.platform.process import run as run_process
from docship.release.notes import read_latest

from .http import HttpClient
from .timeouts import GIT_NETWORK_TIMEOUT_SECONDS, GIT_TIMEOUT_SECONDS

__all__ = [
    "GH_PAGES_BRANCH",
    "GITHUB_API",
    "create_release",
    "parse_repo_slug",
    "update_gh_pages",
]

GITHUB_API = "https://api.github.com"
GH_PAGES_BRANCH = "gh-pages"

_SLUG_RE = re.compile(
    r"github\.com[:/](?P<owner>[A-Za-z0-9_.-]+)/(?P<repo>[A-Za-z0-9_.-]+?)(?:\.git)?/?$"
)


def parse_repo_slug(repo_url: str) -> Result[str, AdapterError]:
    """Extract ``owner/repo`` from an https or ssh GitHub URL."""
    match = _SLUG_RE.search(repo_url.strip())
    if match is None:
        return Err(
            AdapterError(
                step="parse repo url",
                message=f"not a GitHub repository url: {repo_url}",
                kind="io",
            )
        )
    return Ok(f"{match.group('owner')}/{match.group('repo')}")


def _git(
    args: list[str],
    *,
    cwd: Path,
    step: str,
    timeout: float = GIT_TIMEOUT_SECONDS,
    config: Mapping[str, str] | None = None,
) -> Result[str, AdapterError]:
    """Run ``git <args>``; ``args[0]`` is the subcommand, ``config`` becomes ``-c`` options."""
    options = [opt for key, value in (config or {}).items() for opt in ("-c", f"{key}={value}")]
    result = run_process(["git", *options, *args], cwd=cwd, timeout=timeout)
    if isinstance(result, Err):
        return Err(
            AdapterError(
                step=step,
                message=f"git {args[0]} failed (exit {result.error.returncode})",
                detail=result.error.stderr.strip() or None,
            )
        )
    return result


def update_gh_pages(
    *,
    repo_url: str,
    site_folder: Path,
    user_name: str,
    user_email: str,
    message: str,
) -> Result[bool, AdapterError]:
    """Publish ``site_folder`` as the new content of the gh-pages branch.

    Returns:
        Ok(True) when a commit was pushed, Ok(False) when the site was
        already up to date.
    """
    if not site_folder.is_dir():
        return Err(
            AdapterError(
                step="update gh-pages",
                message=f"site folder not found: {site_folder}",
                kind="io",
            )
        )

    with tempfile.TemporaryDirectory(
        prefix="docship-gh-pages-", ignore_cleanup_errors=True
    ) as tmp:
        clone = Path(tmp) / "site"
        cloned = _git(
            [
                "clone",
                "--branch",
                GH_PAGES_BRANCH,
                "--single-branch",
                "--depth",
                "1",
                repo_url,
                str(clone),
            ],
            cwd=Path(tmp),
            step="clone gh-pages",
            timeout=GIT_NETWORK_TIMEOUT_SECONDS,
        )
        if isinstance(cloned, Err):
            return cloned

        copied = copy_tree_contents(site_folder, clone)
        if isinstance(copied, Err):
            return Err(
                AdapterError(
                    step="copy site",
                    message=copied.error.message,
                    kind="io",
                    detail=str(copied.error.path),
                )
            )

        added = _git(["add", "--all"], cwd=clone, step="stage site")
        if isinstance(added, Err):
            return added

        status = _git(["status", "--porcelain"], cwd=clone, step="check changes")
        if isinstance(status, Err):
            return status
        if not status.value.strip():
            return Ok(False)

        committed = _git(
            ["commit", "-m", message],
            cwd=clone,
            step="commit site",
            config={"user.name": user_name, "user.email": user_email},
        )
        if isinstance(committed, Err):
            return committed

        pushed = _git(
            ["push", "origin", GH_PAGES_BRANCH],
            cwd=clone,
            step="push gh-pages",
            timeout=GIT_NETWORK_TIMEOUT_SECONDS,
        )
        if isinstance(pushed, Err):
            return pushed

    return Ok(True)


def _auth_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"token {token}",
        "Accept": "application/vnd.github+json",
    }


def create_release(
    *,
    http: HttpClient,
    repo_url: str,
    release_note_path: Path,
    release_folder: Path,
    asset_zip_path: Path,
    token: str,
) -> Result[str, AdapterError]:
    """Create the release announced by the newest release note.

    The release folder is zipped to ``asset_zip_path`` and attached to the
    release tagged ``v<version>``.

    Returns:
        Ok(html url of the release).
    """
    slug = parse_repo_slug(repo_url)
    if isinstance(slug, Err):
        return slug

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
    release = note.value

    zipped = zip_directory(release_folder, asset_zip_path)
    if isinstance(zipped, Err):
        return Err(
            AdapterError(
                step="zip release folder",
                message=zipped.error.message,
                kind="io",
                detail=str(zipped.error.path),
            )
        )

    created = http.post_json(
        f"{GITHUB_API}/repos/{slug.value}/releases",
        {
            "tag_name": release.tag,
            "name": release.tag,
            "body": release.description,
            "draft": False,
            "prerelease": False,
        },
        headers=_auth_headers(token),
    )
    if isinstance(created, Err):
        return Err(
            AdapterError(
                step="create release",
                message=f"failed to create release {release.tag}",
                kind="network",
                detail=str(created.error),
            )
        )

    upload_url = created.value.get("upload_url")
    if not isinstance(upload_url, str) or not upload_url:
        return Err(
            AdapterError(
                step="create release",
                message="release response has no upload_url",
                kind="network",
            )
        )

    # upload_url is a URI template: ".../assets{?name,label}"
    target = f"{upload_url.split('{', 1)[0]}?name={quote(asset_zip_path.name)}"
    uploaded = http.upload_file(
        target,
        asset_zip_path,
        "application/zip",
        headers=_auth_headers(token),
    )
    if isinstance(uploaded, Err):
        return Err(
            AdapterError(
                step="upload release asset",
                message=f"failed to upload {asset_zip_path.name}",
                kind="network",
                detail=str(uploaded.error),
            )
        )

    html_url = created.value.get("html_url")
    return Ok(html_url if isinstance(html_url, str) else release.tag)
