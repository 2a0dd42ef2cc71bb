from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base class for errors raised by services; `code` is echoed to the client next to the message"""

    code = "UNKNOWN_ERROR"

    def __init__(self, status_code: int, error_detail_message: str):
        super().__init__(status_code=status_code, detail=error_detail_message)


class UserNotFoundError(AppError):
    code = "USER_NOT_FOUND"

    def __init__(self):
        super().__init__(status.HTTP_404_NOT_FOUND, "User not found")


class ProfileNotFoundError(AppError):
    code = "PROFILE_NOT_FOUND"

    def __init__(self, error_detail_message: str = "Profile not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, error_detail_message)


class NotFoundError(AppError):
    code = "NOT_FOUND"

    def __init__(self, error_detail_message: str):
        super().__init__(status.HTTP_404_NOT_FOUND, error_detail_message)


class ValidationError(AppError):
    code = "VALIDATION_ERROR"

    def __init__(self, error_detail_message: str):
        super().__init__(status.HTTP_400_BAD_REQUEST, error_detail_message)


class UnauthorizedError(AppError):
    code = "UNAUTHORIZED"

    def __init__(self, error_detail_message: str = "Unauthorized"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, error_detail_message)


class ForbiddenError(AppError):
    code = "FORBIDDEN"

    def __init__(self, error_detail_message: str = "Unauthorized - Admin access required"):
        super().__init__(status.HTTP_403_FORBIDDEN, error_detail_message)


class DatabaseError(AppError):
    code = "DATABASE_ERROR"

    def __init__(self, error_detail_message: str):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, error_detail_message)


class ServerError(AppError):
    code = "UNKNOWN_ERROR"

    def __init__(self, error_detail_message: str):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, error_detail_message)


STATUS_CODE_TO_ERROR_CODE = {
    status.HTTP_400_BAD_REQUEST: ValidationError.code,
    status.HTTP_401_UNAUTHORIZED: UnauthorizedError.code,
    status.HTTP_403_FORBIDDEN: ForbiddenError.code,
    status.HTTP_404_NOT_FOUND: NotFoundError.code,
    422: ValidationError.code,
}
