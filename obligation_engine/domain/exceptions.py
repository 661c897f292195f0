"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Record or rule fields are out of range (negative amounts, bad day of month, negative term)"""

    pass


class DateConstructionError(DomainException):
    """Calendar arithmetic could not produce a valid date"""

    pass
