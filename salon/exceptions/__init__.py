"""Custom exceptions for the salon management core."""

class SalonError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['status'] = 'error'
        return rv

class BusinessLogicError(SalonError):
    """Exception raised for business logic violations."""
    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)

class TenantRequiredError(BusinessLogicError):
    """Raised when tenant data is written without a tenant in scope."""
    def __init__(self, resource):
        message = f"Cannot write '{resource}' without a tenant"
        super().__init__(message, status_code=400, payload={'resource': resource})
        self.resource = resource

class UnauthorizedError(SalonError):
    """Raised when the current session lacks permission for an action."""
    def __init__(self, message="Unauthorized access"):
        super().__init__(message, 403)
