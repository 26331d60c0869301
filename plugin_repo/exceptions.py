"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class PluginRepoError(Exception):
    """Base exception for all application-specific errors."""


class _VersionResolutionError(PluginRepoError):
    """Shared shape for errors raised while picking a plugin version."""

    def __init__(
        self, message: str, plugin_id: str, requested_version: str, system_info: str
    ):
        self.plugin_id = plugin_id
        self.requested_version = requested_version
        self.system_info = system_info
        super().__init__(message)


class VersionNotFoundError(_VersionResolutionError):
    """Raised when the requested version string does not exist in the catalog."""

    def __init__(self, plugin_id: str, requested_version: str, system_info: str):
        super().__init__(
            f"{plugin_id} v{requested_version} either does not exist "
            f"or is not supported on your system ({system_info})",
            plugin_id,
            requested_version,
            system_info,
        )


class VersionUnsupportedError(_VersionResolutionError):
    """
    Raised when no published version is compatible with this system, or when the
    requested version exists but is not compatible.
    """

    def __init__(self, plugin_id: str, requested_version: str, system_info: str):
        if requested_version:
            message = (
                f"{plugin_id} v{requested_version} is not supported "
                f"on your system ({system_info})"
            )
        else:
            message = f"{plugin_id} is not supported on your system ({system_info})"
        super().__init__(message, plugin_id, requested_version, system_info)


class PluginNotFoundError(PluginRepoError):
    """Raised when the catalog has no entry for the plugin ID."""

    def __init__(self, plugin_id: str):
        self.plugin_id = plugin_id
        super().__init__(f"Plugin '{plugin_id}' not found in the catalog.")


class RepositoryResponseError(PluginRepoError):
    """Raised when the catalog or download server answers with a non-2xx status."""

    def __init__(self, status: int, message: str, url: str):
        self.status = status
        self.message = message
        self.url = url
        super().__init__(f"{url} responded with status {status}: {message}")


class CatalogResponseError(PluginRepoError):
    """Raised when the catalog response body cannot be parsed."""


class ChecksumMismatchError(PluginRepoError):
    """Raised when a downloaded archive fails SHA-256 validation."""

    def __init__(self, expected: str, actual: str, url: str):
        self.expected = expected
        self.actual = actual
        self.url = url
        super().__init__(
            f"Checksum mismatch for '{url}': expected {expected}, got {actual}."
        )


class ConfigurationError(PluginRepoError):
    """Raised for issues related to configuration loading or validation."""
