from lms_backend.core.error_codes import ErrorCode


class ApiError(Exception):
    def __init__(self, status_code: int, code: str, message: str):
        self.status_code = status_code
        self.code = str(code)
        self.message = message
        super().__init__(message)


class ValidationError(ApiError):
    def __init__(self, message: str, code: str = ErrorCode.VALIDATION_FAILED):
        super().__init__(400, code, message)


class UnauthorizedError(ApiError):
    def __init__(self, message: str, code: str = ErrorCode.UNAUTHORIZED):
        super().__init__(401, code, message)


class ForbiddenError(ApiError):
    def __init__(self, message: str, code: str = ErrorCode.FORBIDDEN):
        super().__init__(403, code, message)


class NotFoundError(ApiError):
    def __init__(self, message: str, code: str):
        super().__init__(404, code, message)


class ConflictError(ApiError):
    def __init__(self, message: str, code: str):
        super().__init__(409, code, message)


class InternalError(ApiError):
    def __init__(self, message: str = "Internal server error", code: str = ErrorCode.INTERNAL_ERROR):
        super().__init__(500, code, message)
