"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ForecastProviderError(DomainException):
    """Forecast or historical data provider returned an error or is unavailable"""

    pass


class InputPreconditionError(DomainException):
    """Input violates a precondition of an engine operation"""

    pass


class EmptySeriesError(InputPreconditionError):
    """Series has no points to analyze"""

    pass


class InsufficientDataError(InputPreconditionError):
    """Series has fewer points than the operation requires"""

    pass


class DivisionByZeroError(InputPreconditionError):
    """Derived metric would divide by zero (zero burn rate or zero previous total)"""

    pass
