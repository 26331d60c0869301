"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_API_ROOT = "https://grafana.com/api/plugins"


class RepositoryConfig(BaseModel):
    """A validated configuration model for the catalog client."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Catalog endpoints
    repo_url: str = DEFAULT_API_ROOT
    api_root: str = DEFAULT_API_ROOT

    # Transport settings
    skip_tls_verify: bool = False
    request_timeout: float = 60.0
    max_attempts: int = 3
    base_delay: float = 1.5

    @field_validator("repo_url", "api_root")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensures the endpoint is an absolute http(s) URL without a trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"URL must start with http:// or https://, got: {v!r}")
        return v.rstrip("/")

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v < 1 or v > 600:
            raise ValueError("Request timeout must be between 1 and 600 seconds.")
        return v

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        """Ensures a reasonable number of download attempts."""
        if v < 1 or v > 10:
            raise ValueError("Max attempts must be between 1 and 10.")
        return v

    @field_validator("base_delay")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Base delay cannot be negative.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        return set(cls.model_fields)
