"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ConfigurationError(DomainException):
    """Billing parameters are unusable (e.g. a non-positive cycle length)"""

    pass


class InvalidCycleIndexError(DomainException):
    """Cycle index is negative"""

    pass


class RentalStoreError(DomainException):
    """Rental backend returned an error or is unavailable"""

    pass


class RentalNotFoundError(RentalStoreError):
    """Rental backend has no rental with the requested id"""

    pass
