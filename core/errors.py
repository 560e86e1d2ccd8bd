"""
core/errors.py -- Expected failure conditions raised by the service layer.

Services raise these; route handlers translate them into HTTP responses.
None of them is transient, so nothing retries on them.

code is the machine-readable value used in the API error envelope.
"""


class RentCarError(Exception):
    """Base class for all expected RentCar failures."""

    code = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AlreadyExists(RentCarError):
    code = "already_exists"


class NotFound(RentCarError):
    code = "not_found"


class InvalidCredential(RentCarError):
    code = "invalid_credential"


class ConfigurationError(RentCarError):
    """Fatal at startup -- e.g. a missing token signing secret."""

    code = "configuration_error"
