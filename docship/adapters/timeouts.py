from __future__ import annotations

# Long-running local tools (build script, E2E tests). None means no limit.
BUILD_TIMEOUT_SECONDS: float | None = None
TEST_TIMEOUT_SECONDS: float | None = None
INSTALL_TIMEOUT_SECONDS = 20 * 60.0

# Local git operations (add, status, commit)
GIT_TIMEOUT_SECONDS = 30.0

# Network-bound git operations (clone, push)
GIT_NETWORK_TIMEOUT_SECONDS = 10 * 60.0

# Package pushes (nuget, choco)
PUSH_TIMEOUT_SECONDS = 5 * 60.0
PACK_TIMEOUT_SECONDS = 2 * 60.0

# GitHub REST API, asset uploads included
HTTP_TIMEOUT_SECONDS = 10 * 60.0
