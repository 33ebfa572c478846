"""
Hard failures raised by the aggregation core.

Only misconfiguration is loud: an unusable site identifier, a domain or key
that no adapter handles, or a search-mode request for a platform without a
query shape. Per-record operations never raise; they degrade to empty or
null values instead.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    UNKNOWN_SITE = "UnknownSite"
    UNSUPPORTED_PLATFORM = "UnsupportedPlatform"


class AggregatorError(Exception):
    """
    Base error carrying an explicit kind and the offending value.

    Attributes:
        kind: Which failure this is; callers branch on this, not on message text.
        value: The input that could not be handled (host, key, platform, ...).
    """

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, value: Any, message: str | None = None) -> None:
        self.value = value
        super().__init__(message or f"{self.kind.value}: {value!r}")


class InvalidInputError(AggregatorError):
    kind = ErrorKind.INVALID_INPUT


class UnknownSiteError(AggregatorError):
    kind = ErrorKind.UNKNOWN_SITE


class UnsupportedPlatformError(AggregatorError):
    kind = ErrorKind.UNSUPPORTED_PLATFORM
