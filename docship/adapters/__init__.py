"""Call-throughs to external tools and services.

Each adapter wraps one collaborator (nuget, git, the GitHub API, choco) and
reports failures as ``AdapterError``.
"""
