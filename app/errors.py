"""Exceptions raised while resolving and serving catalogs."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog failures.

    ``status_code`` is the HTTP status the route layer answers with.
    """

    status_code: int = 400


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are missing."""


class FormatError(CatalogError):
    """The catalog path or token does not have the expected shape."""


class UnsupportedSourceError(CatalogError):
    """The token names a catalog source this addon cannot serve."""


class DecodeError(CatalogError):
    """The token body is not valid base64."""


class EncodingError(DecodeError):
    """The decoded token bytes are not valid UTF-8 text."""


class MissingListIdError(CatalogError):
    """A list query was requested without a list identifier."""


class UpstreamError(CatalogError):
    """The provider could not be reached or answered with an error status."""

    status_code = 502


class ParseError(CatalogError):
    """A payload did not match the expected schema."""

    status_code = 502


class DescriptorParseError(DecodeError, ParseError):
    """The decoded token is not a valid catalog descriptor."""

    status_code = 400
