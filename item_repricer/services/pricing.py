from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from ..config.loader import PricingConfig
from ..models.items import ProcessedItem, UniqueItem
from .coercion import as_decimal, loosely_equals

"""Pricing engine and the custom rounding policy.

Markup:
- section == exempt section (52): no markup, percentage 0
- original price >= threshold (150): 7 %
- otherwise: 7.5 %

Rounding (applied to every price, marked up or not):
- integer            -> unchanged
- fraction in (0, .5) -> whole + .50
- fraction >= .5      -> whole + .95

Prices are computed as Decimal. Before the fraction is classified the value
is quantized to 1e-6, so a float-derived 107.49999999999999 counts as
107.5 and not as something below the .50 boundary. The working precision
is widened to fit the integer digits of the price plus the six places.
"""

__all__ = [
    "ROUNDING_TOLERANCE",
    "custom_round",
    "markup_percentage",
    "price_item",
]

ROUNDING_TOLERANCE = Decimal("0.000001")
TOLERANCE_PLACES = 6
HALF = Decimal("0.50")
NINETY_FIVE = Decimal("0.95")
ZERO = Decimal(0)
HUNDRED = Decimal(100)


def custom_round(price: Any) -> Decimal:
    """Snap a non-integer price to a .50 or .95 ending."""
    value = as_decimal(price)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + TOLERANCE_PLACES + 2)
        p = value.quantize(ROUNDING_TOLERANCE, rounding=ROUND_HALF_UP)
        whole = p.to_integral_value(rounding=ROUND_FLOOR)
        fraction = p - whole
        if fraction == 0:
            return whole
        if fraction < HALF:
            return whole + HALF
        return whole + NINETY_FIVE


def markup_percentage(item: UniqueItem, pricing: PricingConfig) -> Decimal:
    """Percentage markup for ``item``; 0 for the exempt section."""
    if loosely_equals(item.section, pricing.exempt_section):
        return ZERO
    if item.original_price >= pricing.threshold:
        return pricing.high_tier_percent
    return pricing.low_tier_percent


def price_item(item: UniqueItem, output_index: int, pricing: PricingConfig | None = None) -> ProcessedItem:
    pricing = pricing or PricingConfig()
    exempt = loosely_equals(item.section, pricing.exempt_section)
    percentage = markup_percentage(item, pricing)
    if exempt:
        raw_price = item.original_price
    else:
        raw_price = item.original_price * (1 + percentage / HUNDRED)
    return ProcessedItem(
        item_code=item.item_code,
        item_name=item.item_name,
        original_price=item.original_price,
        new_price=custom_round(raw_price),
        price_increased=not exempt,
        section=item.section,
        percentage=percentage,
        output_index=output_index,
    )
