"""
Environment, settings and logging setup.
"""

from .env import load_env, load_settings, Settings, KNOWN_KEYS
from .log import setup_logging

__all__ = ["load_env", "load_settings", "Settings", "KNOWN_KEYS", "setup_logging"]
