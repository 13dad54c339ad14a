"""Renderers for command output.

Both renderers implement BaseRenderer and only depend on the shape of the
result objects, never on the modules that produce them.
"""

from .base import BaseRenderer, VerbosityLevel
from .cli_renderer import CLIRenderer
from .json_renderer import JSONRenderer

__all__ = ["BaseRenderer", "CLIRenderer", "JSONRenderer", "VerbosityLevel"]
