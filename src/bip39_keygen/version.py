"""Application version string: ``v<package version>-<git commit>``."""

import os
from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION = "bip39-keygen"


def package_version() -> str:
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0"


def version_string() -> str:
    """Build the version string; the commit comes from ``GIT_COMMIT``."""
    commit = os.environ.get("GIT_COMMIT", "").strip() or "unknown"
    return f"v{package_version()}-{commit}"


VERSION = version_string()
