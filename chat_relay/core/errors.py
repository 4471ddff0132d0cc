"""
Relay errors - the two request-level failure kinds plus the startup error.

InvalidInput is the caller's fault and its message goes back verbatim.
ProviderFailure carries server-side detail only; callers get a generic message.
"""

from typing import Optional


class RelayError(Exception):
    """Base class for errors turned into JSON responses."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.public_message
        super().__init__(self.message)

    def to_dict(self):
        return {"error": self.public_message}


class InvalidInput(RelayError):
    """Missing or malformed prompt, messages or file."""

    status_code = 400
    public_message = "Invalid request"

    def to_dict(self):
        return {"error": self.message}


class ProviderFailure(RelayError):
    """Network error, provider-side error or malformed provider response."""

    status_code = 500
    public_message = "Failed to get a response from the AI. Check the server logs for details."


class ProviderTimeout(ProviderFailure, TimeoutError):
    """The provider did not answer within the configured timeout."""


class UnrecognizedProviderResponse(ProviderFailure):
    """The provider answered but no known field held the text."""


class ConfigurationError(Exception):
    """Fatal startup error, e.g. the API key is missing."""
