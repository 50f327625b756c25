"""
Settings for the lorebook domain engine.

Values come from environment variables; a .env file at the project root is
loaded first when present.

    LOREBOOK_STORE_DIR         Directory for the JSON file store (unset: in-memory)
    LOREBOOK_LOG_LEVEL         Logging level name (default: INFO)
    LOREBOOK_LINK_PLACEHOLDER  Token that blanks matched spans while linking (default: #)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

_env_path = BASE_DIR / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


def check_placeholder(value: str) -> str:
    """Validate a link placeholder token.

    Matched spans are blanked as "-<placeholder>-", so the token must be a
    single non-empty word without dashes or whitespace.

    Raises:
        ValueError: If the token could split into several words
    """
    if not value or "-" in value or any(char.isspace() for char in value):
        raise ValueError(f"Link placeholder must be one word without dashes, got: {value!r}")
    return value


# ============================================================================
# Configuration from environment variables
# ============================================================================

STORE_DIR = os.environ.get("LOREBOOK_STORE_DIR") or None
LOG_LEVEL = os.environ.get("LOREBOOK_LOG_LEVEL", "INFO").upper()
LINK_PLACEHOLDER = check_placeholder(os.environ.get("LOREBOOK_LINK_PLACEHOLDER", "#"))

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts and services embedding the engine.

    Args:
        level: Level name overriding LOREBOOK_LOG_LEVEL
    """
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
