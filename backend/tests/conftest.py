"""Root conftest — shared test configuration."""

import os

# Deterministic settings regardless of the developer's environment / .env
os.environ.setdefault("DISPLAY_TIMEZONE", "UTC")
os.environ.setdefault("LOG_FORMAT", "text")
