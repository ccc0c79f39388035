import os

from .development import *  # noqa: F401,F403

DEBUG = False

LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
