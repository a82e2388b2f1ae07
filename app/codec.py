"""Conversion between catalog descriptors and their public catalog ids."""

from __future__ import annotations

import base64
import binascii
import json

from pydantic import ValidationError

from .errors import DecodeError, DescriptorParseError, EncodingError
from .models import CatalogDescriptor

TRAKT_SOURCE = "trakt"
TOKEN_SUFFIX = f"-{TRAKT_SOURCE}"


def encode(descriptor: CatalogDescriptor) -> str:
    """Return the opaque catalog id for ``descriptor``.

    The id is ``base64(json(descriptor))`` followed by the provider suffix. JSON
    keys are sorted so equal descriptors always produce the same id.
    """

    payload = descriptor.model_dump(mode="json", by_alias=True)
    text = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return f"{encoded}{TOKEN_SUFFIX}"


def decode(token: str) -> CatalogDescriptor:
    """Rebuild the descriptor stored in ``token``.

    ``token`` may carry the provider suffix or be the bare base id already split
    off by the path parser.
    """

    body = token[: -len(TOKEN_SUFFIX)] if token.endswith(TOKEN_SUFFIX) else token
    try:
        raw = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Catalog id is not valid base64: {exc}") from exc

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(f"Catalog id does not contain UTF-8 text: {exc}") from exc

    try:
        return CatalogDescriptor.model_validate_json(text)
    except ValidationError as exc:
        raise DescriptorParseError(
            f"Catalog id does not describe a catalog query: {exc.error_count()} error(s)"
        ) from exc
