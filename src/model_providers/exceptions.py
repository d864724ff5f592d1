"""Catalog Exception Hierarchy.

Typed exceptions for provider fetches. ``FetchFailedError`` is the only
runtime failure the catalog store reports; other exceptions raised by a
fetch are wrapped into it.
"""

from enum import Enum
from typing import Optional

from src.model_providers.config import ProviderId


class ErrorCode(Enum):
    """Standardized error codes for catalog failures."""

    FETCH_FAILED = "FETCH_FAILED"
    UNKNOWN_PROVIDER = "UNKNOWN_PROVIDER"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class FetchFailureReason(Enum):
    """Why a provider fetch failed."""

    NETWORK = "network"
    AUTH = "auth"
    DECODE = "decode"
    UNKNOWN = "unknown"


class CatalogError(Exception):
    """Base exception for all catalog errors.

    All custom catalog exceptions inherit from this, allowing a single
    handler to catch the entire hierarchy.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class FetchFailedError(CatalogError):
    """Raised when a provider service rejects or cannot complete a fetch."""

    def __init__(
        self,
        message: str = "Fetch failed",
        provider: Optional[ProviderId] = None,
        reason: FetchFailureReason = FetchFailureReason.UNKNOWN,
    ):
        super().__init__(message, ErrorCode.FETCH_FAILED)
        self.provider = provider
        self.reason = reason

    def to_dict(self) -> dict:
        return {
            "code": self.error_code.value,
            "message": self.message,
            "provider": self.provider.value if self.provider else None,
            "reason": self.reason.value,
        }


class UnknownProviderError(CatalogError, LookupError):
    """Raised when no service is registered for a provider id."""

    def __init__(self, provider: object):
        super().__init__(
            f"No provider service registered for {provider!r}",
            ErrorCode.UNKNOWN_PROVIDER,
        )
        self.provider = provider
