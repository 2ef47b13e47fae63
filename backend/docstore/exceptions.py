"""Typed errors raised by the record access service."""


class DataServiceError(Exception):
    """Base exception for record access errors."""

    code: str | None = None
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        """Serialize for API error responses."""
        return {"code": self.code, "message": self.message, "status": self.status_code}


class ValidationError(DataServiceError):
    """User-facing error with a stable error code."""

    status_code = 400

    def __init__(self, code: str, message: str, status_code: int | None = None):
        super().__init__(message, status_code=status_code)
        self.code = code


class WrongDataError(ValidationError):
    """Identifier missing (400)."""

    def __init__(self, message: str):
        super().__init__("WRONG_DATA", message)


class InvalidIdError(ValidationError):
    """Identifier present but not a valid ObjectId (400)."""

    def __init__(self, type_name: str, message: str):
        super().__init__(f"INVALID_{type_name.upper()}_ID", message)
        self.type_name = type_name


class NotFoundError(ValidationError):
    """Required record does not exist (404)."""

    def __init__(self, message: str):
        super().__init__("NOT_FOUND", message, status_code=404)


class MissingUpdateDataError(DataServiceError):
    """Update called without a payload."""

    def __init__(self, message: str = "The data is required for update"):
        super().__init__(message)
