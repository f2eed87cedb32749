"""Domain errors raised by services and translated to HTTP errors by routes."""


class IntelliWattError(Exception):
    """Base class for IntelliWatt errors."""


class ValidationError(IntelliWattError, ValueError):
    """Input rejected before anything was written."""


class StoreUnavailable(IntelliWattError, ConnectionError):
    """Backing store unreachable or a query failed."""
