"""
Goods table builder for Lorry Receipts

Normalizes the two cargo representations found on bookings into rows:
- structured goods_items (one row per item)
- legacy paired comma lists cargo_units / material_description, zipped by position
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from app.schemas.lr import BookingRecord

logger = logging.getLogger(__name__)

DEFAULT_ROW_CAPACITY = 5


@dataclass(frozen=True)
class CargoRow:
    """One goods table row; an empty string renders as a blank cell"""
    quantity: str = ""
    description: str = ""
    weight: str = ""
    value: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.quantity or self.description or self.weight or self.value)


def _split_list(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [token.strip() for token in text.split(",")]


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""


def build_cargo_rows(booking: BookingRecord) -> List[CargoRow]:
    """
    Build goods rows for a booking.

    A non-empty goods_items list wins outright and the legacy strings are
    ignored. Otherwise the legacy lists are zipped by position; the shorter
    list leaves blank cells and the row count equals the longer list.
    """
    if booking.goods_items:
        return [
            CargoRow(
                quantity=_clean(item.quantity),
                description=_clean(item.description),
                weight=_clean(item.weight),
                value=_clean(item.value),
            )
            for item in booking.goods_items
        ]

    quantities = _split_list(booking.cargo_units)
    descriptions = _split_list(booking.material_description)
    row_count = max(len(quantities), len(descriptions))

    return [
        CargoRow(
            quantity=quantities[i] if i < len(quantities) else "",
            description=descriptions[i] if i < len(descriptions) else "",
        )
        for i in range(row_count)
    ]


def fit_cargo_rows(rows: List[CargoRow], capacity: int = DEFAULT_ROW_CAPACITY) -> List[CargoRow]:
    """Pad with empty rows up to capacity; rows beyond capacity are dropped without notice"""
    if len(rows) > capacity:
        logger.debug(f"Goods table holds {capacity} rows, dropping {len(rows) - capacity}")
        return list(rows[:capacity])
    return list(rows) + [CargoRow() for _ in range(capacity - len(rows))]
