from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv

from .config import get_settings_module
from .core.logging_utils import setup_logging


def configure_logging(settings_module: Optional[str] = None) -> str:
    """Entry-point logging setup from the active settings module.

    Returns the settings module name that was used.
    """
    load_dotenv(override=False)
    name = settings_module or get_settings_module()
    settings = importlib.import_module(name)
    setup_logging(
        json_output=bool(getattr(settings, "LOG_JSON", True)),
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
    )
    return name
