# errors.py
"""
Error taxonomy shared by services and controllers.
Services raise these; the application error handler turns them into the JSON envelope.
"""


class ErrorCode:
    """Machine-readable error codes returned alongside the message."""
    VALIDATION_ERROR = 'validation_error'
    UNAUTHENTICATED = 'unauthenticated'
    FORBIDDEN = 'forbidden'
    NOT_FOUND = 'not_found'
    CONFLICT = 'conflict'
    INTERNAL_ERROR = 'internal_error'


class CEPSError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    error_code = ErrorCode.INTERNAL_ERROR
    default_message = 'Internal server error'

    def __init__(self, message=None, error_code=None):
        self.message = message or self.default_message
        if error_code:
            self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self):
        return {
            'success': False,
            'message': self.message,
            'error_code': self.error_code
        }


class ValidationError(CEPSError):
    status_code = 400
    error_code = ErrorCode.VALIDATION_ERROR
    default_message = 'Invalid request data'


class Unauthenticated(CEPSError):
    status_code = 401
    error_code = ErrorCode.UNAUTHENTICATED
    default_message = 'Not authorized'


class Forbidden(CEPSError):
    status_code = 403
    error_code = ErrorCode.FORBIDDEN
    default_message = 'Access denied'


class NotFound(CEPSError):
    status_code = 404
    error_code = ErrorCode.NOT_FOUND
    default_message = 'Resource not found'


class Conflict(CEPSError):
    status_code = 409
    error_code = ErrorCode.CONFLICT
    default_message = 'Resource already exists'


class Internal(CEPSError):
    status_code = 500
    error_code = ErrorCode.INTERNAL_ERROR
    default_message = 'Internal server error'
