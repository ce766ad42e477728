"""
Shared field types for the booking schemas.

Amounts are carried as ``Decimal`` internally and emitted as JSON numbers.
"""

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValueError("amount cannot be a boolean")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float, str)):
        try:
            return Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"not a valid amount: {value!r}") from exc
    raise ValueError(f"unsupported amount type {type(value).__name__}")


Money = Annotated[
    Decimal,
    BeforeValidator(_to_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]
