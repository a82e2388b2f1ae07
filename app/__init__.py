"""Dynamic Catalogs: Trakt-backed Stremio catalog addon."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = ["app", "create_app", "register_routes"]


def __getattr__(name: str) -> Any:
    # Defer importing the FastAPI app so ``app.codec`` and friends stay light.
    if name in __all__:
        module = import_module("app.main")
        return getattr(module, name)
    raise AttributeError(f"module 'app' has no attribute {name}")
