from __future__ import annotations

from typing import Optional


class FetchError(Exception):
    """Base error for a failed listing or item fetch."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url

    def __str__(self) -> str:
        base = super().__str__()
        if self.url:
            return f"{base} ({self.url})"
        return base


class NetworkFailure(FetchError):
    """The request could not be completed or returned an error status."""


class ParseFailure(FetchError):
    """The response was not the JSON shape we expected."""
