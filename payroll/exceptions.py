from rest_framework import status

from core.exceptions import APIError


class PayrollError(APIError):
    """Base for payroll business errors"""

    default_code = "PAYROLL_ERROR"
    default_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message, details=None):
        super().__init__(
            message,
            code=self.default_code,
            status_code=self.default_status,
            details=details,
        )


class ConfigurationError(PayrollError):
    """No pay profile covers the requested period"""

    default_code = "PAYROLL_PROFILE_MISSING"
    default_status = status.HTTP_409_CONFLICT


class StateTransitionError(PayrollError):
    """A lifecycle transition is not allowed from the current state"""

    default_code = "INVALID_STATE_TRANSITION"
    default_status = status.HTTP_409_CONFLICT


class PersistenceError(PayrollError):
    """A lifecycle transition failed to persist and was rolled back"""

    default_code = "PAYROLL_PERSISTENCE_FAILED"
    default_status = status.HTTP_503_SERVICE_UNAVAILABLE
