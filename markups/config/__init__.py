"""Configuration providers."""

from .provider import APIConfig, ConfigProvider, EnvConfigProvider, LoaderConfig

__all__ = ["APIConfig", "ConfigProvider", "EnvConfigProvider", "LoaderConfig"]
