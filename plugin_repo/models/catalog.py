"""
Pydantic models for the catalog service's plugin metadata response.

The catalog may send `null` or omit fields; those are read as empty values
rather than rejected, so a well-formed response never fails validation just
because a field is blank.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _none_as(empty: Any):
    return BeforeValidator(lambda v: empty if v is None else v)


NullableStr = Annotated[str, _none_as("")]


class ArchMeta(BaseModel):
    """Checksum of the archive built for one architecture key (or "any")."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    sha256: NullableStr = ""


def _null_arch_entries(v: Any) -> Any:
    if isinstance(v, dict):
        return {key: {} if meta is None else meta for key, meta in v.items()}
    return v


class Version(BaseModel):
    """
    A single published version of a plugin.

    `arch` is None for versions that run everywhere (e.g. source-code zipballs);
    otherwise it maps architecture keys such as "linux_amd64" or "any" to the
    metadata of the matching archive.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: NullableStr = ""
    commit: NullableStr = ""
    url: NullableStr = ""
    arch: Annotated[
        dict[str, ArchMeta] | None, BeforeValidator(_null_arch_entries)
    ] = None


class Plugin(BaseModel):
    """
    A plugin's catalog entry.

    NOTE: `versions` is expected to arrive sorted newest-first from the catalog
    service. Nothing here re-sorts it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: NullableStr = ""
    name: NullableStr = ""
    category: NullableStr = ""
    url: NullableStr = ""
    versions: Annotated[list[Version], _none_as([])] = Field(default_factory=list)
