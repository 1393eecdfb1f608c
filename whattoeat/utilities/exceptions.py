"""Exception hierarchy shared by the store, the lottery and the API layer."""
from typing import Any, Mapping, Optional


class WhatToEatError(Exception):
    """Base error.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context
        code: machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_code = "internal_error"

    def __init__(self, message: str = "Unexpected error", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ValidationError(WhatToEatError):
    """Raised when caller input is invalid."""

    http_status = 422
    default_code = "validation_error"


class InvalidTagError(ValidationError):
    """Raised when a tag or filter is not one of the known meal periods."""

    default_code = "invalid_tag"


class EmptySelectionError(WhatToEatError):
    """Raised when a lottery is requested but no item is eligible."""

    http_status = 400
    default_code = "empty_selection"


class LotteryBusyError(WhatToEatError):
    """Raised by callers that need to report a lottery already in progress."""

    http_status = 409
    default_code = "lottery_busy"


class StorageError(WhatToEatError):
    """Raised when durable storage cannot be read or written."""

    default_code = "storage_error"


class StorageCorruptedError(StorageError):
    """Raised when the stored record cannot be parsed."""

    default_code = "storage_corrupted"


class UnsupportedSchemaError(StorageError):
    """Raised when the stored record carries an unknown schema version."""

    default_code = "unsupported_schema"
