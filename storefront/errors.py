"""Exceptions raised by the storefront pipeline."""

from __future__ import annotations

from typing import Iterable, Optional


class ConfigurationMissingError(RuntimeError):
    """Raised when the eBay application id or store name is not configured."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = sorted(missing)
        super().__init__(f"{' and '.join(self.missing)} env vars required")


class UpstreamError(RuntimeError):
    """Base class for failures talking to the Finding API."""


class UpstreamUnavailableError(UpstreamError):
    """Raised on transport errors or a non-success HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamRejectedError(UpstreamError):
    """Raised when the envelope acknowledgement is not ``Success``."""

    def __init__(self, ack: Optional[str], message: Optional[str] = None) -> None:
        self.ack = ack
        self.message = message
        super().__init__(f"Finding API returned ack={ack!r}: {message or 'no error message'}")


class MalformedResponseError(ValueError):
    """Raised when the envelope lacks the expected response structure."""
