"""Exception types raised by the compliance package."""


class ComplianceError(Exception):
    """Base class for shift compliance errors."""


class InputError(ComplianceError):
    """Input file could not be read or parsed."""

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = list(errors or [])
