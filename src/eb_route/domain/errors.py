# domain/errors.py


class RoutingError(Exception):
    """Base class for routing engine errors."""


class InvalidQueryParameter(RoutingError, ValueError):
    """Query rejected at the entry point, before any search work."""


class NetworkFrozen(RoutingError, RuntimeError):
    """Mutation attempted after the network was frozen for querying."""
