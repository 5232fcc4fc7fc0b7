"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """A required input is missing, non-numeric or out of its domain"""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class PreconditionError(DomainException):
    """Input would break a calculation precondition (e.g. division by zero periods)"""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class RateSourceError(DomainException):
    """Reference rate provider returned an error or is unavailable"""

    pass
