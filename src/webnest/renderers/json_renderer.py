"""JSON renderer for scripting and export."""

import json
import sys
from enum import Enum
from pathlib import PurePath
from typing import Any

from .base import BaseRenderer


class JSONRenderer(BaseRenderer):
    """Renders every result as one JSON document on stdout."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

    def _emit(self, data: dict[str, Any]) -> None:
        json.dump(data, sys.stdout, indent=2, default=str)
        print()  # Newline at end

    def render_install(self, url: str, app_name: str, browser_name: str, result: Any) -> None:
        self._emit(
            {
                "url": url,
                "name": app_name,
                "browser": browser_name,
                "result": self._serialize_value(result),
            }
        )

    def render_browsers(self, browsers: list[Any], icon_tools: list[str] | None = None) -> None:
        data: dict[str, Any] = {
            "browsers": [
                {
                    "id": browser.browser_id,
                    "name": browser.name,
                    "available": browser.available,
                    "path": browser.path,
                }
                for browser in browsers
            ]
        }
        if icon_tools is not None:
            data["icon_tools"] = icon_tools
        self._emit(data)

    def render_apps(self, apps: list[Any]) -> None:
        self._emit({"apps": self._serialize_value(apps)})

    def render_removals(self, name: str, results: list[Any]) -> None:
        self._emit({"name": name, "results": self._serialize_value(results)})

    @staticmethod
    def _serialize_value(value: Any) -> Any:
        """
        Serialize value to JSON-compatible format.

        Args:
            value: Value to serialize

        Returns:
            JSON-serializable value
        """
        if value is None:
            return None

        if isinstance(value, (str, int, float, bool)):
            return value

        if isinstance(value, (list, tuple)):
            return [JSONRenderer._serialize_value(v) for v in value]

        if isinstance(value, dict):
            return {k: JSONRenderer._serialize_value(v) for k, v in value.items()}

        if isinstance(value, Enum):
            return value.value

        if isinstance(value, PurePath):
            return str(value)

        if hasattr(value, "__dict__"):
            return {k: JSONRenderer._serialize_value(v) for k, v in value.__dict__.items()}

        # Fallback: convert to string
        return str(value)
