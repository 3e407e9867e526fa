"""
Error taxonomy for the ledger.

Services raise these; the HTTP layer renders them with ``http_status`` and
``code``. Nothing here is retried automatically.
"""
from typing import Optional


class LedgerError(Exception):
    code = "LEDGER_ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"detail": self.message, "code": self.code}


class SchemaError(LedgerError):
    """DDL, introspection or migration failure. Safe to retry."""

    code = "SCHEMA_ERROR"


class PersistenceError(LedgerError):
    """Storage failure during a read or write; open transactions are rolled back."""

    code = "PERSISTENCE_ERROR"


class NotFoundError(LedgerError):
    code = "NOT_FOUND"
    http_status = 404


class ValidationError(LedgerError):
    """Bad caller input. Raised before anything is written."""

    code = "VALIDATION_ERROR"
    http_status = 400


class MissingField(ValidationError):
    code = "MISSING_FIELD"

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"{field} is required")
        self.field = field


class EmptyItemList(ValidationError):
    code = "EMPTY_ITEM_LIST"


class InvalidQuantity(ValidationError):
    code = "INVALID_QUANTITY"


class InvalidName(ValidationError):
    code = "INVALID_NAME"


class NegativeBasePrice(ValidationError):
    code = "NEGATIVE_BASE_PRICE"


class NegativeEffectivePrice(ValidationError):
    code = "NEGATIVE_EFFECTIVE_PRICE"


class NegativeSubtotal(ValidationError):
    code = "NEGATIVE_SUBTOTAL"


class NegativeDiscount(ValidationError):
    code = "NEGATIVE_DISCOUNT"


class InvalidAmount(ValidationError):
    """Money value that is not a whole number of minor units or does not fit storage."""

    code = "INVALID_AMOUNT"
