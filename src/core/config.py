"""Application configuration using Pydantic Settings."""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional, Tuple

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.interfaces import UpstreamOperation

DEFAULT_PARENT_BASE_URL = "https://applauncher.xyz"
API_PREFIX = "/api"


def validate_path_overrides(overrides: Dict[str, str]) -> Dict[str, str]:
    """
    Check ``UPSTREAM_PATH_OVERRIDES`` against the known operations.

    Raises:
        ValueError: Naming every unknown operation or empty path, so a
            misconfigured deployment fails at startup instead of per request
    """
    known = [operation.value for operation in UpstreamOperation]
    unknown = sorted(name for name in overrides if name not in known)
    if unknown:
        raise ValueError(
            f"Unknown operation(s) in upstream path overrides: {', '.join(unknown)}; "
            f"expected one of {', '.join(known)}"
        )
    empty = sorted(name for name, path in overrides.items() if not str(path).strip())
    if empty:
        raise ValueError(f"Empty path in upstream path overrides for: {', '.join(empty)}")
    return overrides


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "credits-gateway"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Parent service, consulted in this order
    parent_api_base: Optional[str] = None
    next_public_parent_api_base: Optional[str] = None
    parent_base_url: Optional[str] = None

    upstream_timeout_seconds: float = 8.0
    upstream_path_overrides: Dict[str, str] = {}
    expose_upstream_errors: bool = False

    # CORS
    cors_allow_origins: list[str] = ["*"]

    # Metrics
    metrics_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("upstream_path_overrides")
    @classmethod
    def check_path_overrides(cls, value: Dict[str, str]) -> Dict[str, str]:
        return validate_path_overrides(value)

    def parent_base_candidates(self) -> Tuple[Optional[str], ...]:
        """Configured parent base addresses in precedence order."""
        return (
            self.parent_api_base,
            self.next_public_parent_api_base,
            self.parent_base_url,
        )


def tidy_base_url(raw: str) -> str:
    """
    Normalize an operator-supplied base address.

    Trailing slashes are removed, as is a trailing ``/api`` segment, since
    every upstream path already starts with the API prefix.
    """
    base = raw.strip().rstrip("/")
    if base.endswith(API_PREFIX):
        base = base[: -len(API_PREFIX)].rstrip("/")
    return base


def resolve_parent_base_url(candidates) -> Tuple[str, bool]:
    """
    Pick the first non-empty candidate.

    Returns:
        The tidied base address and whether it was explicitly configured
    """
    for candidate in candidates:
        if candidate and candidate.strip():
            return tidy_base_url(candidate), True
    return tidy_base_url(DEFAULT_PARENT_BASE_URL), False


@dataclass(frozen=True)
class GatewayConfig:
    """
    Resolved configuration injected into the upstream client and handlers.

    Built once from Settings so that call sites never read the environment.
    """

    base_url: str
    timeout_seconds: float = 8.0
    path_overrides: Dict[str, str] = field(default_factory=dict)
    expose_upstream_errors: bool = False
    base_url_configured: bool = True

    def __post_init__(self) -> None:
        validate_path_overrides(self.path_overrides)

    @classmethod
    def from_settings(cls, source: Settings) -> "GatewayConfig":
        base_url, configured = resolve_parent_base_url(source.parent_base_candidates())
        return cls(
            base_url=base_url,
            timeout_seconds=source.upstream_timeout_seconds,
            path_overrides=dict(source.upstream_path_overrides),
            expose_upstream_errors=source.expose_upstream_errors,
            base_url_configured=configured,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_gateway_config() -> GatewayConfig:
    """Get the gateway configuration derived from settings."""
    return GatewayConfig.from_settings(get_settings())


settings = get_settings()
