"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass, field
from typing import List, Protocol

from markups.modules.capabilities.keys import KNOWN_CAPABILITIES, PRELOAD_DEFAULTS


@dataclass
class APIConfig:
    """API configuration."""
    port: int
    host: str
    log_level: str


@dataclass
class LoaderConfig:
    """Capability loader configuration."""
    cdn_base_url: str = "https://cdn.jsdelivr.net/npm"
    fetch_timeout: float = 30.0
    preload_enabled: bool = True
    preload_capabilities: List[str] = field(default_factory=lambda: list(PRELOAD_DEFAULTS))
    preload_idle_timeout_ms: int = 5000
    idle_quiet_period: float = 0.5

    @property
    def preload_idle_timeout(self) -> float:
        """Idle wait bound in seconds."""
        return self.preload_idle_timeout_ms / 1000.0


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...

    def get_loader_config(self) -> LoaderConfig:
        """Get capability loader configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=int(os.getenv("API_PORT", "8080")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def get_loader_config(self) -> LoaderConfig:
        """Get capability loader configuration from environment variables."""
        preload_env = os.getenv("PRELOAD_CAPABILITIES", ",".join(PRELOAD_DEFAULTS))
        preload = [key.strip() for key in preload_env.split(",") if key.strip()]

        unknown = [key for key in preload if key not in KNOWN_CAPABILITIES]
        if unknown:
            raise ValueError(
                f"PRELOAD_CAPABILITIES contains unknown capabilities: {', '.join(unknown)}. "
                f"Known capabilities: {', '.join(KNOWN_CAPABILITIES)}"
            )

        return LoaderConfig(
            cdn_base_url=os.getenv("CDN_BASE_URL", "https://cdn.jsdelivr.net/npm").rstrip("/"),
            fetch_timeout=float(os.getenv("FETCH_TIMEOUT", "30")),
            preload_enabled=os.getenv("PRELOAD_ENABLED", "true").lower() == "true",
            preload_capabilities=preload,
            preload_idle_timeout_ms=int(os.getenv("PRELOAD_IDLE_TIMEOUT_MS", "5000")),
            idle_quiet_period=float(os.getenv("IDLE_QUIET_PERIOD", "0.5")),
        )
