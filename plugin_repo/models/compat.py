"""
Describes the requesting system (OS and architecture) for catalog lookups.
"""

import platform
import sys
from dataclasses import dataclass

# Python's machine names mapped onto the architecture names used by the catalog
_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv7l": "arm",
    "armv6l": "arm",
}

ANY_ARCH = "any"


@dataclass(frozen=True)
class CompatibilityOpts:
    """
    Identifies the requesting system by operating system and architecture.

    The canonical key from `os_and_arch()` is used both for matching entries in a
    version's `arch` mapping and for the headers sent to the catalog service.
    """

    os: str
    arch: str
    host_version: str = ""

    @classmethod
    def from_system(cls, host_version: str = "") -> "CompatibilityOpts":
        """Builds a descriptor for the platform this interpreter runs on."""
        machine = platform.machine().lower()
        return cls(
            os=platform.system() or sys.platform,
            arch=_ARCH_ALIASES.get(machine, machine),
            host_version=host_version,
        )

    def os_and_arch(self) -> str:
        return f"{self.os.lower()}_{self.arch.lower()}"

    def request_headers(self) -> dict[str, str]:
        """Headers that let the catalog service filter by compatibility."""
        headers = {
            "X-Plugin-OS": self.os.lower(),
            "X-Plugin-Arch": self.arch.lower(),
            "X-Plugin-Compat": self.os_and_arch(),
        }
        if self.host_version:
            headers["X-Host-Version"] = self.host_version
        return headers

    def __str__(self) -> str:
        if self.host_version:
            return f"host v{self.host_version} {self.os_and_arch()}"
        return self.os_and_arch()
