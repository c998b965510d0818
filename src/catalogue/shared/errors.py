"""Error kinds raised by the query composer and the review aggregator.

Both subclass Protean's exceptions so that command handlers, query
functions and the API exception handlers treat them like any other
validation failure or missing object.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class InvalidArgument(ValidationError):
    """A caller-supplied value cannot be turned into a query or a review.

    Carries the usual ``{field: [messages]}`` mapping in ``messages``.
    """


class NotFound(ObjectNotFoundError):
    """A review (or the product holding it) does not exist."""
