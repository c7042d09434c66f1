"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidHorizonError(DomainException):
    """Projection horizon is not a positive number of days"""

    pass


class UnsupportedCurrencyError(DomainException):
    """Account currency cannot be converted to the display currency"""

    pass

