"""
Error taxonomy for the transactions bounded context.

Every error raised on purpose by the service carries an explicit ``kind`` tag.
The HTTP boundary dispatches on that tag:

- VALIDATION / BUSINESS -> 422 with the message (and field errors, if any)
- SYSTEM (or any untagged exception) -> 500 with a static message
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


VALIDATION_ERROR = "VALIDATION_ERROR"
TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"
UNABLE_TO_CONVERT_TO_TARGET_CURRENCY = "UNABLE_TO_CONVERT_TO_TARGET_CURRENCY"
BAD_REQUEST = "BAD_REQUEST"
SYSTEM_ERROR = "SYSTEM_ERROR"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    BUSINESS = "business"
    SYSTEM = "system"


@dataclass(frozen=True)
class FieldError:
    """A problem with a single input field."""
    field_name: str
    reason: str

    def to_dict(self) -> dict:
        return {"fieldName": self.field_name, "reason": self.reason}


class ServiceError(Exception):
    """Base class for errors raised by the transaction services."""

    kind = ErrorKind.SYSTEM

    def __init__(self, message: str, fields: Optional[List[FieldError]] = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields or [])

    def to_dict(self) -> dict:
        payload = {"message": self.message}
        if self.fields:
            payload["fields"] = [f.to_dict() for f in self.fields]
        return payload

    def __str__(self):
        if self.fields:
            return f"[message '{self.message}', fields {[f.to_dict() for f in self.fields]}]"
        return self.message


class ValidationError(ServiceError):
    """Raised when one or more input fields break a validation rule."""

    kind = ErrorKind.VALIDATION

    def __init__(self, fields: List[FieldError]):
        super().__init__(VALIDATION_ERROR, fields)


class BusinessError(ServiceError):
    """Raised for domain-level failures such as a missing transaction."""

    kind = ErrorKind.BUSINESS


class ExchangeRateProviderError(ServiceError):
    """Raised when the exchange rate source cannot be queried or understood."""
