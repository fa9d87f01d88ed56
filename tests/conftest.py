"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or log as JSON noise
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("FRONTEND_URL", "http://frontend.test")
os.environ.setdefault("LOG_FORMAT", "text")
