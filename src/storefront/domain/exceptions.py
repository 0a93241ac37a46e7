"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidInput(ValidationError):
    """A price, quantity or identifier could not be accepted as given.

    Raised before any computation starts, so no partial result exists.
    """


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StoreUnavailable(DomainException):
    """The external counter store could not be reached."""
