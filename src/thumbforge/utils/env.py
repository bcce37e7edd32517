"""Environment variable utilities for Thumbforge.

This module provides access to the Google API credential used by the
generation client.
"""

from __future__ import annotations

import logging
import os

from thumbforge.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def get_google_api_key() -> str:
    """Get Google API key from environment.

    Checks GOOGLE_API_KEY first, then falls back to GEMINI_API_KEY.

    Returns:
        The API key string

    Raises:
        ConfigurationError: If neither environment variable is set

    """
    api_key = os.environ.get("GOOGLE_API_KEY") or os.environ.get("GEMINI_API_KEY")
    if not api_key or not api_key.strip():
        msg = "GOOGLE_API_KEY (or GEMINI_API_KEY) environment variable is required"
        raise ConfigurationError(msg)
    return api_key.strip()

