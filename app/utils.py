"""Utility helpers for the catalog addon."""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

VIDEO_ID_MARKER = "v="
VIDEO_ID_LENGTH = 11


def best_effort(func: Callable[..., T], *args: Any) -> T | None:
    """Call ``func`` and return ``None`` instead of raising ``ValueError``.

    Used for optional fields whose extraction may fail without invalidating the
    surrounding item.
    """

    try:
        return func(*args)
    except (TypeError, ValueError) as exc:
        logger.debug("Skipping optional value from %s: %s", func.__name__, exc)
        return None


def extract_video_id(url: str) -> str:
    """Return the 11 character video id following ``v=`` in ``url``."""

    start = url.find(VIDEO_ID_MARKER)
    if start == -1:
        raise ValueError("URL does not contain a video id")
    start += len(VIDEO_ID_MARKER)
    video_id = url[start : start + VIDEO_ID_LENGTH]
    if len(video_id) != VIDEO_ID_LENGTH:
        raise ValueError("Failed to extract video id")
    return video_id


def decode_json_segment(segment: str) -> Any:
    """Decode a URL-safe base64 JSON path segment."""

    padded = segment + "=" * (-len(segment) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded)
        return json.loads(raw.decode("utf-8"))
    except ValueError as exc:
        raise ValueError("Invalid configuration segment") from exc


def encode_json_segment(value: Any) -> str:
    """Encode ``value`` as an unpadded URL-safe base64 JSON path segment."""

    text = json.dumps(value, separators=(",", ":"))
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")
