"""Exception hierarchy shared by providers, the session and the CLI."""

from __future__ import annotations


class ContextBuilderError(Exception):
    """Base class for expected, user-reportable failures."""


class InputError(ContextBuilderError):
    """User input is missing or malformed; the operation is not attempted."""


class ProviderError(ContextBuilderError):
    """The content provider could not list or read the requested directory."""


class TransportError(ContextBuilderError):
    """The request to a remote provider could not be completed."""
