"""Service configuration.

Values can be given directly or read from ``UNIAPI_*`` environment
variables via ``ServiceConfig.from_env``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_MAX_PAGES = 1000
ENV_PREFIX = "UNIAPI_"


class ServiceConfig(BaseModel):
    """Configuration shared by every call made through a service.

    Attributes:
        base_url: Absolute base URL that endpoint paths are joined to
        request_timeout: Total timeout in seconds for one HTTP round trip
        call_timeout: Deadline in seconds for a whole call, every page
            included; ``None`` disables the deadline
        max_pages: Upper bound on pages fetched by one paginated call
    """

    base_url: str = Field(..., min_length=1)
    request_timeout: float = Field(DEFAULT_REQUEST_TIMEOUT, gt=0)
    call_timeout: float | None = Field(None, gt=0)
    max_pages: int = Field(DEFAULT_MAX_PAGES, gt=0)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base_url is an absolute http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        prefix: str = ENV_PREFIX,
        **overrides: object,
    ) -> ServiceConfig:
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)
            prefix: Variable name prefix
            **overrides: Values taking precedence over the environment

        Returns:
            Validated ServiceConfig

        Raises:
            pydantic.ValidationError: If a variable is missing or malformed
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for name in cls.model_fields:
            raw = env.get(f"{prefix}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw
        values.update(overrides)
        return cls.model_validate(values)
