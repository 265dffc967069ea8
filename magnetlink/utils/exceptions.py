"""Exception hierarchy for magnetlink.

Every parser fails fast by raising one of these. Syntactic problems belong to
the ``MalformedInputError`` family; a well-formed magnet link that carries no
BitTorrent info-hash raises ``WrongMagnetLinkTypeError`` instead.
"""

from __future__ import annotations

from typing import Any


class MagnetLinkError(Exception):
    """Base exception for all magnetlink errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize magnetlink error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class MalformedInputError(MagnetLinkError):
    """Syntactic violations in parsed input."""


class MalformedUrnError(MalformedInputError):
    """URN does not have the urn:<nid>:<nss> shape."""

    def __init__(self, reason: str | None = None):
        """Initialize with an optional sub-reason."""
        message = "Malformed urn"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.reason = reason


class MalformedNumRangeError(MalformedInputError):
    """Number range is neither ``N`` nor ``A-B``."""


class MalformedMagnetLinkError(MalformedInputError):
    """Magnet link could not be parsed or decoded.

    ``reason`` is the short sub-reason (``"invalid xt"``, ``"invalid scheme"``,
    ...). When another error caused the failure it is chained as
    ``__cause__`` and its text is kept in ``details["cause"]``.
    """

    def __init__(self, reason: str, cause: BaseException | None = None):
        """Initialize with a sub-reason and the underlying cause, if any."""
        details = {"cause": str(cause)} if cause is not None else None
        super().__init__(f"Malformed magnet link: {reason}", details)
        self.reason = reason


class WrongMagnetLinkTypeError(MagnetLinkError):
    """Magnet link is valid but is not a torrent (no btih exact topic)."""


class ConfigurationError(MagnetLinkError):
    """Configuration validation errors."""
