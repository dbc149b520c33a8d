"""Routing error classes.

Only ConfigurationError and InvalidInputError ever reach callers of a
routing strategy. QuoteDecodeError is raised by decoders and handled
per candidate.
"""


class RoutingError(Exception):
    """Base error for routing operations."""

    pass


class ConfigurationError(RoutingError):
    """Network configuration or a required contract address is missing."""

    pass


class InvalidInputError(RoutingError, ValueError):
    """Caller supplied a malformed address, amount, or same-token pair."""

    pass


class QuoteDecodeError(RoutingError):
    """Successful call returned bytes that do not match the expected layout."""

    pass
