"""
Core module - configuration shared across the toolkit
"""

from playbook_toolkit.core.config import (
    Settings,
    get_settings,
    load_override_environment,
)

__all__ = [
    "Settings",
    "get_settings",
    "load_override_environment",
]
