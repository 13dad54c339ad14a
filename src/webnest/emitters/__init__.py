"""Launcher emitters for macOS, Windows and Linux.

Emitters auto-register themselves using the @registry.register decorator.
This module auto-imports all emitter modules to trigger their registration.
"""

import importlib
import pkgutil
from pathlib import Path

_emitter_dir = Path(__file__).parent
for module_info in pkgutil.iter_modules([str(_emitter_dir)]):
    if module_info.name.endswith("_emitter"):
        importlib.import_module(f".{module_info.name}", package=__name__)

__all__ = []
