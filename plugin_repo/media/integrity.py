"""
Provides checksum validation for downloaded plugin archives.
"""

import hashlib
import logging

from plugin_repo.exceptions import ChecksumMismatchError

log = logging.getLogger(__name__)


class ArchiveIntegrityChecker:
    """A collection of static methods for validating archive integrity."""

    @staticmethod
    def sha256_hex(data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()

    @staticmethod
    def verify_sha256(data: bytes, expected: str, url: str = "") -> None:
        """
        Compares the SHA-256 digest of `data` against `expected`.

        An empty `expected` means the archive has no published checksum and is
        accepted as-is. Hex digests are compared case-insensitively.

        Raises:
            ChecksumMismatchError: If the digest does not match.
        """
        if not expected:
            log.debug(f"No checksum supplied for '{url}', skipping validation.")
            return

        actual = ArchiveIntegrityChecker.sha256_hex(data)
        if actual != expected.strip().lower():
            log.warning(
                f"Checksum validation failed for '{url}': expected {expected}, "
                f"got {actual}."
            )
            raise ChecksumMismatchError(expected, actual, url)
        log.debug(f"Checksum validated for '{url}'.")
