"""
Custom exception classes
"""


class ClinicException(Exception):
    """Base exception for the clinic application"""
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class AuthenticationError(ClinicException):
    """Exception for authentication failures"""
    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, status_code=401)


class AuthorizationError(ClinicException):
    """Exception for role and ownership check failures"""
    def __init__(self, message: str = "Access forbidden"):
        super().__init__(message, status_code=403)


class NotFoundError(ClinicException):
    """Exception for resource not found"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ValidationError(ClinicException):
    """Exception for validation failures"""
    def __init__(self, message: str = "Validation error"):
        super().__init__(message, status_code=422)


class DuplicateIdentityError(ClinicException):
    """Email, username or phone already belongs to another account"""
    def __init__(self, message: str = "Identity already registered"):
        super().__init__(message, status_code=400)


class AlreadyDecidedError(ClinicException):
    """State transition attempted on a record that is already resolved"""
    def __init__(self, message: str = "Record has already been decided"):
        super().__init__(message, status_code=409)


class PersistenceError(ClinicException):
    """Underlying database failure"""
    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message, status_code=500)
