"""
Configuration management for the remove-from-group action.
"""

from .config_loader import ConfigLoader
from .settings import ActionSettings, load_action_settings

__all__ = ["ConfigLoader", "ActionSettings", "load_action_settings"]
