"""
Validation and canonicalization of raw payment lines.

Checks run in a fixed order and stop at the first violation, each with its
own error class, so callers can tell exactly which rule an item broke.
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pos_ledger.core.errors import (
    EmptyItemList,
    InvalidAmount,
    InvalidName,
    InvalidQuantity,
    MissingField,
    NegativeBasePrice,
    NegativeDiscount,
    NegativeEffectivePrice,
    NegativeSubtotal,
)
from pos_ledger.core.money import MAX_MINOR_UNITS, MoneyNormalizer, as_minor_units, round_half_up


@dataclass(frozen=True)
class NormalizedPaymentItem:
    product_id: Optional[int]
    name: str
    quantity_decimal: float
    legacy_quantity: int
    base_unit_price: int
    edited_unit_price: Optional[int]
    effective_unit_price: int
    line_subtotal: int
    line_discount: int


def _as_quantity(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        quantity = float(value)
    except (TypeError, ValueError):
        return None
    return quantity if math.isfinite(quantity) else None


def parse_amount(value: Any, field: str, label: Optional[str] = None) -> int:
    """Caller-supplied money as exact minor units; never truncated."""
    try:
        return as_minor_units(value)
    except ValueError as exc:
        prefix = f"{label}: " if label else ""
        raise InvalidAmount(f"{prefix}{field.replace('_', ' ')} {exc}") from exc


def _optional_amount(raw: Mapping[str, Any], field: str, label: str) -> Optional[int]:
    value = raw.get(field)
    return None if value is None else parse_amount(value, field, label)


def resolve_effective_price(raw: Mapping[str, Any], base_unit_price: int, label: str = "Item") -> int:
    """Explicit effective price, else explicit generic price, else base price."""
    for field in ("effective_unit_price", "price"):
        explicit = _optional_amount(raw, field, label)
        if explicit is not None:
            return explicit
    return base_unit_price


def legacy_quantity_for(quantity: float) -> int:
    rounded = round_half_up(quantity)
    return rounded if rounded > 0 else 1


def normalize_payment_item(
    raw: Mapping[str, Any],
    normalizer: MoneyNormalizer,
    position: int = 1,
) -> NormalizedPaymentItem:
    """
    Validate one raw line and return its canonical form.

    Args:
        raw: Mapping with name, quantity, base_unit_price and the optional
            product_id, edited_unit_price, effective_unit_price, price,
            line_subtotal and line_discount keys
        normalizer: Rounding policy for the derived line subtotal
        position: 1-based index of the item, used in error messages

    Raises:
        ValidationError subclass for the first rule the item breaks
    """
    label = f"Item {position}"

    quantity = _as_quantity(raw.get("quantity"))
    if quantity is None or quantity <= 0:
        raise InvalidQuantity(f"{label}: quantity must be greater than 0")
    if quantity > MAX_MINOR_UNITS:
        raise InvalidQuantity(f"{label}: quantity {quantity} is too large")

    name = (raw.get("name") or "").strip()
    if not name:
        raise InvalidName(f"{label}: name cannot be empty")

    if raw.get("base_unit_price") is None:
        raise MissingField("base_unit_price", f"{label}: base unit price is required")
    base_unit_price = parse_amount(raw["base_unit_price"], "base_unit_price", label)
    if base_unit_price < 0:
        raise NegativeBasePrice(f"{label}: base unit price cannot be negative")

    effective_unit_price = resolve_effective_price(raw, base_unit_price, label)
    if effective_unit_price < 0:
        raise NegativeEffectivePrice(f"{label}: effective unit price cannot be negative")

    # A negative override is dropped rather than rejected
    edited_unit_price = _optional_amount(raw, "edited_unit_price", label)
    if edited_unit_price is not None and edited_unit_price < 0:
        edited_unit_price = None

    line_subtotal = _optional_amount(raw, "line_subtotal", label)
    if line_subtotal is None:
        line_subtotal = normalizer.line_amount(effective_unit_price, quantity)
        if line_subtotal > MAX_MINOR_UNITS:
            raise InvalidAmount(f"{label}: line subtotal {line_subtotal} is too large")
    if line_subtotal < 0:
        raise NegativeSubtotal(f"{label}: line subtotal cannot be negative")

    line_discount = _optional_amount(raw, "line_discount", label) or 0
    if line_discount < 0:
        raise NegativeDiscount(f"{label}: line discount cannot be negative")

    return NormalizedPaymentItem(
        product_id=raw.get("product_id"),
        name=name,
        quantity_decimal=quantity,
        legacy_quantity=legacy_quantity_for(quantity),
        base_unit_price=base_unit_price,
        edited_unit_price=edited_unit_price,
        effective_unit_price=effective_unit_price,
        line_subtotal=line_subtotal,
        line_discount=line_discount,
    )


def normalize_payment_items(
    items: Sequence[Mapping[str, Any]],
    normalizer: MoneyNormalizer,
) -> List[NormalizedPaymentItem]:
    """Validate every item before anything is written; all or nothing."""
    if not items:
        raise EmptyItemList("Payment must contain at least one item")
    return [
        normalize_payment_item(raw, normalizer, position)
        for position, raw in enumerate(items, start=1)
    ]


def item_to_dict(item: NormalizedPaymentItem) -> Dict[str, Any]:
    return {
        "product_id": item.product_id,
        "name": item.name,
        "quantity": item.legacy_quantity,
        "price": item.effective_unit_price,
        "quantity_decimal": item.quantity_decimal,
        "base_unit_price": item.base_unit_price,
        "edited_unit_price": item.edited_unit_price,
        "line_subtotal": item.line_subtotal,
        "line_discount": item.line_discount,
    }
