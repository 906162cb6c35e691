"""Service-level exceptions.

Services raise these; controllers map ``status_code`` onto the JSON
envelope. They derive from ``ValueError`` so callers that only care about
"the request was rejected" can keep catching that.
"""


class ServiceError(ValueError):
    status_code = 400

    def __init__(self, message: str, errors: dict | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class BusinessRuleError(ServiceError):
    status_code = 400


class AuthenticationError(ServiceError):
    status_code = 401


class ForbiddenError(ServiceError):
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class ValidationError(ServiceError):
    status_code = 422


RESTRICTED_ACCOUNT_MESSAGE = (
    "Your account is restricted due to overdue items. "
    "Please return all overdue items to regain access."
)
