class ZoneGuardError(Exception):
    """Base class for errors raised by zoneguard."""


class ZoneIndexNotReadyError(ZoneGuardError, RuntimeError):
    """A query was issued before any zone data was indexed."""
