"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when user input fails validation at the command boundary."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class DuplicateHoldingError(AppError):
    """Raised when a symbol/exchange pair is already in the portfolio."""

    def __init__(self, symbol: str, exchange: str):
        super().__init__(
            f"{symbol} is already in your portfolio on {exchange}",
            code="DUPLICATE_HOLDING",
        )


class StorageUnavailableError(AppError):
    """Raised when the persisted holdings list cannot be read or written."""

    status_code = 503

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_UNAVAILABLE")
