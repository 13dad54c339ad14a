"""Emitter registry.

This module provides the central registry for launcher emitter plugins.
Emitters register themselves using the @registry.register decorator.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..platforms import PlatformKind, detect_platform

if TYPE_CHECKING:
    from ..emitters.protocol import EmitterPlugin

logger = logging.getLogger(__name__)


@dataclass
class EmitterMetadata:
    """Metadata about a registered emitter."""

    platform: PlatformKind
    name: str
    description: str
    launcher_suffix: str
    plugin_class: "type[EmitterPlugin]"

    def create(self) -> "EmitterPlugin":
        return self.plugin_class()


class EmitterRegistry:
    """
    Central registry for emitter plugins, one per platform.

    Example:
        @registry.register
        class LinuxEmitter:
            platform = PlatformKind.LINUX
            ...

        # Later:
        emitter = registry.emitter_for(PlatformKind.LINUX)
    """

    def __init__(self):
        self._plugins: dict[PlatformKind, EmitterMetadata] = {}

    def register(self, plugin_class: "type[EmitterPlugin]") -> "type[EmitterPlugin]":
        """
        Register an emitter plugin.

        Can be used as decorator or called directly.

        Args:
            plugin_class: Emitter class to register

        Returns:
            Plugin class (for decorator usage)

        Raises:
            ValueError: If plugin is missing required attributes
        """
        required_attrs = ["platform", "name", "description", "launcher_suffix"]
        for attr in required_attrs:
            if not hasattr(plugin_class, attr):
                raise ValueError(
                    f"Emitter {plugin_class.__name__} missing required attribute: {attr}"
                )

        platform = plugin_class.platform

        if platform in self._plugins:
            logger.warning(f"Emitter for '{platform.value}' already registered, overwriting")

        self._plugins[platform] = EmitterMetadata(
            platform=platform,
            name=plugin_class.name,
            description=plugin_class.description,
            launcher_suffix=plugin_class.launcher_suffix,
            plugin_class=plugin_class,
        )
        logger.debug(f"Registered emitter: {platform.value}")

        return plugin_class

    def get(self, platform: PlatformKind) -> EmitterMetadata | None:
        """
        Get emitter metadata by platform.

        Args:
            platform: Target platform

        Returns:
            Metadata if found, None otherwise
        """
        return self._plugins.get(platform)

    def emitter_for(self, platform: PlatformKind | None = None) -> "EmitterPlugin":
        """
        Instantiate the emitter for a platform.

        Args:
            platform: Target platform (host platform if omitted)

        Returns:
            Emitter instance

        Raises:
            UnsupportedPlatformError: If the host platform is unsupported
            ValueError: If no emitter is registered for the platform
        """
        platform = platform or detect_platform()
        metadata = self.get(platform)
        if not metadata:
            raise ValueError(f"No emitter registered for platform: {platform.value}")
        return metadata.create()


# Global registry instance
registry = EmitterRegistry()
