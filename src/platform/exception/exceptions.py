from typing import Any


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Extra fields rendered next to `detail` in the error response"""
        return {}


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class GoneError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 410)


class ServiceBusyError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 503)
