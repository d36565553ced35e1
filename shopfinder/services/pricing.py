from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from shopfinder.schemas.catalogue import Item


@dataclass(frozen=True)
class PricingMetrics:
    unit_price: float
    unit_measure: Optional[str]


def unit_price(price: float, quantity: Optional[int]) -> float:
    return price / (quantity or 1)


def round_price(value: float, places: int = 3) -> float:
    """Round for display only; ranking always uses the exact unit price."""
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def compute_pricing_metrics(item: Item) -> PricingMetrics:
    return PricingMetrics(
        unit_price=unit_price(item.price, item.quantity),
        unit_measure=item.unit_label,
    )


__all__ = ["compute_pricing_metrics", "PricingMetrics", "round_price", "unit_price"]
