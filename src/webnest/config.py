"""Configuration management for webnest."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    ASSET_USER_AGENT,
    BROWSER_USER_AGENT,
    DEFAULT_ASSET_TIMEOUT,
    DEFAULT_HTML_TIMEOUT,
    DEFAULT_LINUX_ICON_DIR,
    DEFAULT_MAX_REDIRECTS,
    ICO_SIZES,
    ICONSET_SIZES,
)

logger = logging.getLogger(__name__)


class NetworkConfig(BaseModel):
    """HTTP fetching configuration."""

    html_timeout: float = Field(
        default=DEFAULT_HTML_TIMEOUT,
        description="Timeout in seconds for fetching web pages",
    )
    asset_timeout: float = Field(
        default=DEFAULT_ASSET_TIMEOUT,
        description="Timeout in seconds for downloading icons and manifests",
    )
    max_redirects: int = Field(
        default=DEFAULT_MAX_REDIRECTS,
        description="Maximum number of redirects to follow per request",
    )
    browser_user_agent: str = Field(
        default=BROWSER_USER_AGENT,
        description="User agent sent when fetching HTML pages",
    )
    asset_user_agent: str = Field(
        default=ASSET_USER_AGENT,
        description="User agent sent when downloading icons and manifests",
    )

    @field_validator("html_timeout", "asset_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @field_validator("max_redirects")
    @classmethod
    def _non_negative_redirects(cls, value: int) -> int:
        if value < 0:
            raise ValueError("max_redirects cannot be negative")
        return value


class IconConfig(BaseModel):
    """Icon discovery and conversion configuration."""

    enabled: bool = Field(default=True, description="Fetch an icon from the website")
    linux_icon_dir: Path = Field(
        default=Path(DEFAULT_LINUX_ICON_DIR),
        description="Directory where Linux launcher icons are stored",
    )
    ico_sizes: list[int] = Field(
        default_factory=lambda: list(ICO_SIZES),
        description="Resolutions packed into Windows .ico files",
    )
    iconset_sizes: list[int] = Field(
        default_factory=lambda: list(ICONSET_SIZES),
        description="Base resolutions of the macOS iconset (@2x variants are added)",
    )

    @property
    def linux_icon_path(self) -> Path:
        """Linux icon directory with ``~`` expanded."""
        return self.linux_icon_dir.expanduser()


class InstallConfig(BaseModel):
    """Launcher installation configuration."""

    default_browser: str = Field(default="chrome", description="Browser used when none is given")
    apps_dir: Path | None = Field(
        default=None,
        description="Override the per-browser launcher directory",
    )
    register_with_os: bool = Field(
        default=True,
        description="Register launchers with Launch Services / desktop database",
    )


class OutputConfig(BaseModel):
    """Output formatting configuration."""

    color: bool = Field(default=True, description="Use colored output")
    verbosity: str = Field(
        default="normal",
        description="Verbosity level: quiet, normal, verbose, debug",
    )


class Config(BaseSettings):
    """Main configuration for webnest."""

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="WEBNEST_",
        env_nested_delimiter="__",
    )

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    icon: IconConfig = Field(default_factory=IconConfig)
    install: InstallConfig = Field(default_factory=InstallConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def to_toml(self) -> str:
        """
        Export configuration to TOML string.

        Returns:
            TOML formatted configuration string
        """
        import tomli_w

        return tomli_w.dumps(self.model_dump(mode="json", exclude_none=True))

    def to_toml_file(self, path: Path) -> None:
        """
        Export configuration to TOML file.

        Args:
            path: Path to save the TOML file
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_toml(), encoding="utf-8")
        logger.info(f"Exported config to: {path}")


def get_config_paths() -> list[Path]:
    """
    Get configuration file paths in order of precedence (lowest to highest).

    Returns:
        List of existing config file paths
    """
    candidates = [
        Path("/etc/webnest/config.toml"),
        Path.home() / ".config" / "webnest" / "config.toml",
        Path.home() / ".webnest.toml",
        Path.cwd() / ".webnest.toml",
    ]
    return [path for path in candidates if path.exists()]


def load_config(extra_paths: list[Path] | None = None) -> Config:
    """
    Load configuration from files.

    Configuration is loaded in this order (later files override earlier):
    1. System-wide config (/etc/webnest/config.toml)
    2. User config (~/.config/webnest/config.toml)
    3. User home config (~/.webnest.toml)
    4. Current directory config (.webnest.toml)
    5. Explicit paths (--config)

    Environment variables (WEBNEST_NETWORK__HTML_TIMEOUT, ...) fill in
    anything the files leave unset.

    Args:
        extra_paths: Additional config files with the highest precedence

    Returns:
        Merged configuration
    """
    config_paths = get_config_paths()
    if extra_paths:
        config_paths.extend(extra_paths)

    config_data: dict[str, Any] = {}

    for config_path in config_paths:
        try:
            with open(config_path, "rb") as f:
                file_data = tomllib.load(f)
            config_data = _merge_configs(config_data, file_data)
            logger.debug(f"Loaded config from {config_path}")
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")

    return Config(**config_data)


def _merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Recursively merge two configuration dictionaries.

    Args:
        base: Base configuration
        override: Configuration to override base with

    Returns:
        Merged configuration
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_configs(result[key], value)
        else:
            result[key] = value

    return result
