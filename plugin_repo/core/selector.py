"""
Picks the plugin version to install for a requested version string and system.
"""

import logging

from plugin_repo.exceptions import VersionNotFoundError, VersionUnsupportedError
from plugin_repo.models.catalog import Plugin, Version
from plugin_repo.models.compat import ANY_ARCH, CompatibilityOpts

log = logging.getLogger(__name__)


def normalize_version(version: str) -> str:
    """
    Removes spaces and a single leading '^' or 'v'.

    This is a textual transform only: "^1.2.3" becomes "1.2.3" and must then match
    a catalog entry exactly. No semver range is evaluated.
    """
    normalized = version.replace(" ", "")
    if normalized.startswith(("^", "v")):
        return normalized[1:]
    return normalized


def supports_current_arch(version: Version, compat_opts: CompatibilityOpts) -> bool:
    """A version without arch metadata runs everywhere."""
    if version.arch is None:
        return True
    return compat_opts.os_and_arch() in version.arch or ANY_ARCH in version.arch


def latest_supported_version(
    plugin: Plugin, compat_opts: CompatibilityOpts
) -> Version | None:
    """Returns the first (newest) version compatible with the system, if any."""
    for v in plugin.versions:
        if supports_current_arch(v, compat_opts):
            return v
    return None


def select_version(
    plugin: Plugin,
    version: str,
    compat_opts: CompatibilityOpts,
    logger: logging.Logger | None = None,
) -> Version:
    """
    Selects the most appropriate plugin version.

    - Returns the requested version if it exists and is supported.
    - Returns the latest supported version if no version is requested.
    - Raises VersionNotFoundError if the requested version does not exist.
    - Raises VersionUnsupportedError if nothing in the catalog supports this
      system, or if the requested version exists but is not supported.

    Expects `plugin.versions` to be sorted so the newest version comes first.
    """
    logger = logger or log
    version = normalize_version(version)

    latest_for_arch = latest_supported_version(plugin, compat_opts)
    if latest_for_arch is None:
        raise VersionUnsupportedError(plugin.id, version, str(compat_opts))

    if not version:
        return latest_for_arch

    match = next((v for v in plugin.versions if v.version == version), None)
    if match is None:
        logger.debug(
            f"Requested plugin version {plugin.id} v{version} not found but "
            f"potential fallback version '{latest_for_arch.version}' was found"
        )
        raise VersionNotFoundError(plugin.id, version, str(compat_opts))

    if not supports_current_arch(match, compat_opts):
        logger.debug(
            f"Requested plugin version {plugin.id} v{version} is not supported on "
            f"your system but potential fallback version "
            f"'{latest_for_arch.version}' was found"
        )
        raise VersionUnsupportedError(plugin.id, version, str(compat_opts))

    return match
