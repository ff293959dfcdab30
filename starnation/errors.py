"""
Exception types raised by the Cosmic Community Creator services.

Core modules raise these; the Streamlit layer catches them at the call site,
logs them and shows a user-facing message.
"""

from __future__ import annotations


class StarnationError(Exception):
    """Base class for all application errors."""


class GenerationError(StarnationError):
    """A generative AI call failed or returned nothing usable."""


class MissingApiKeyError(GenerationError):
    """No Gen AI API key is configured."""

    def __init__(self, message: str = "An API key is required for this chamber."):
        super().__init__(message)


class InvalidApiKeyError(GenerationError):
    """The vendor rejected the configured API key."""

    def __init__(self, message: str = "Your API key is invalid. Please select a valid key."):
        super().__init__(message)


class StorageError(StarnationError):
    """A media store could not save, list or delete objects."""


class StorageAccessDeniedError(StorageError):
    """The object store refused access (usually a bucket policy misconfiguration)."""


class PollTimeoutError(StarnationError):
    """A polled operation did not complete within its attempt cap."""

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class PollCancelledError(StarnationError):
    """Polling was stopped because the caller closed the chamber."""


class PaymentError(StarnationError):
    """Checkout session creation failed."""
