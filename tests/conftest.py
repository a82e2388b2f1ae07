"""Pytest configuration and test helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where ``app`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio without requiring trio."""

    return "asyncio"


@pytest.fixture
def settings():
    """Settings with Trakt credentials and no ``.env`` lookup."""

    from app.config import Settings

    return Settings(
        _env_file=None,
        TRAKT_CLIENT_ID="client-id",
        TRAKT_CLIENT_SECRET="client-secret",
        TRAKT_API_URL="https://api.trakt.example",
    )  # type: ignore[call-arg]
