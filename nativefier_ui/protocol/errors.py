from __future__ import annotations


class ProtocolError(ValueError):
    """A wire message could not be decoded into a known message type."""
