"""Utility functions and helpers."""

from .logger import setup_logger
from .naming import generate_app_id, get_app_name_from_url, sanitize_app_name, validate_url

__all__ = [
    "generate_app_id",
    "get_app_name_from_url",
    "sanitize_app_name",
    "setup_logger",
    "validate_url",
]
