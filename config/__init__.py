"""
Configuration for the lorebook domain engine.
"""

from .settings import LINK_PLACEHOLDER, LOG_LEVEL, STORE_DIR, check_placeholder, configure_logging

__all__ = ["LINK_PLACEHOLDER", "LOG_LEVEL", "STORE_DIR", "check_placeholder", "configure_logging"]
