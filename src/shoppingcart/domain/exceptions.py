"""Domain-level exceptions.

All pricing failures are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidArgumentError(ValidationError):
    """The order details handed to a calculation are missing or malformed."""


class RuleConfigurationError(ValidationError):
    """A pricing rule definition could not be turned into a rule."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class NoProgressError(DomainException):
    """A full pass over the rules priced nothing while items remain."""


class PassLimitExceededError(DomainException):
    """The calculation needed more passes than the configured bound."""
