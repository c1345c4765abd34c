"""
Rating Errors

Failures that propagate to the caller. Per-carrier problems are not errors:
they travel inside a Quote as Sentinel values (see models.py).
"""


class RatingError(Exception):
    """Base class for all rating engine errors."""


class ValidationError(RatingError, ValueError):
    """Route is missing required geographic fields on one side."""


class ClassificationError(RatingError):
    """No predicate mapping or precedence exists for a derived category."""


class RoutingUpstreamError(RatingError):
    """Mileage/geocoding collaborator unavailable or returned an invalid reply."""


class PersistenceError(RatingError, RuntimeError):
    """Lane store unreachable or a lane store operation failed."""


__all__ = [
    "RatingError",
    "ValidationError",
    "ClassificationError",
    "RoutingUpstreamError",
    "PersistenceError",
]
