"""
Costing engine — line-itemised cost of one opening from its cut list and glass.

Covers:
  - Profiles priced by weight (kg/m × price/kg) or by linear metre
  - Glass priced by square metre
  - Accessories (reserved, always zero)

Profile pricing is linear: stock-bar length and cutting waste are ignored.
A cut whose profile code is missing from the price table, or whose entry fails
validation, contributes nothing and is reported as an AppliedFallback rather
than raised. Only entries referenced by a cut are validated.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from carpentry_core.config import MM_PER_M
from carpentry_core.models.carpentry_schema import ProfilePrice
from carpentry_core.models.results import (
    AppliedFallback,
    CostBreakdown,
    CostLineItem,
    CutSpec,
    FallbackKind,
    GlassResult,
)
from carpentry_core.services.logging_config import engine_logger

logger = engine_logger("costing")

PriceTable = Mapping[str, Union[ProfilePrice, Dict[str, Any]]]

# Accessories are not priced yet; kept as an explicit zero subtotal
_ACCESSORIES_COST: float = 0.0


def resolve_price(info: Union[ProfilePrice, Dict[str, Any]]) -> ProfilePrice:
    return info if isinstance(info, ProfilePrice) else ProfilePrice.model_validate(info)


class _PriceLookup:
    """
    Lazy view over a raw price table. Only codes referenced by a cut are
    validated, once each; entries no cut uses are never read.
    """

    def __init__(self, profile_prices: PriceTable):
        self._raw = profile_prices or {}
        self._prices: Dict[str, ProfilePrice] = {}
        self._invalid: Dict[str, str] = {}

    def get(self, cut: CutSpec) -> Tuple[Optional[ProfilePrice], Optional[AppliedFallback]]:
        code = cut.profile_code
        if code not in self._prices and code not in self._invalid and code in self._raw:
            try:
                self._prices[code] = resolve_price(self._raw[code])
            except ValidationError as exc:
                self._invalid[code] = f"{exc.error_count()} validation error(s)"

        if code in self._prices:
            return self._prices[code], None

        if code in self._invalid:
            logger.warning(f"Price for profile '{code}' ({cut.label}) is unusable: {self._invalid[code]}; cut left uncosted")
            return None, AppliedFallback(
                kind=FallbackKind.INVALID_PROFILE_PRICE,
                reference=code,
                message=f"{cut.label}: price entry for profile '{code}' is invalid, cost omitted",
            )

        logger.warning(f"No price for profile '{code}' ({cut.label}); cut left uncosted")
        return None, AppliedFallback(
            kind=FallbackKind.MISSING_PROFILE_PRICE,
            reference=code,
            message=f"{cut.label}: profile '{code}' missing from price table, cost omitted",
        )


def _unit_cost(cost: float, quantity: float) -> float:
    return cost / quantity if quantity else 0.0


def profile_cut_cost(cut: CutSpec, price: ProfilePrice) -> float:
    """
    Cost of one cut entry (all its pieces).

    Formula:
        metres = length_mm / 1000 × quantity
        by weight: metres × kg/m × price/kg
        otherwise: metres × price/m
    """
    linear_m = (cut.length_mm / MM_PER_M) * cut.quantity
    if price.priced_by_weight:
        return linear_m * price.weight_per_meter_kg * price.price_per_unit
    return linear_m * price.price_per_unit


def glass_cost(glass: GlassResult, glass_price_per_sqm: float) -> float:
    area_sqm = glass.area_sqm * glass.quantity
    return area_sqm * glass_price_per_sqm


def total(
    cuts: Sequence[CutSpec],
    glass: GlassResult,
    profile_prices: PriceTable,
    glass_price_per_sqm: float,
) -> CostBreakdown:
    """
    Aggregate the cost of an opening.

    Line items are ordered: every priced cut in input order, then the glass.
    total_cost == profiles_cost + glass_cost + accessories_cost.
    """
    prices = _PriceLookup(profile_prices)
    line_items: List[CostLineItem] = []
    fallbacks: List[AppliedFallback] = []
    profiles_cost = 0.0

    # ── Profiles ──────────────────────────────────────────────────────────────
    for cut in cuts:
        price, fallback = prices.get(cut)
        if price is None:
            fallbacks.append(fallback)
            continue

        cost = profile_cut_cost(cut, price)
        profiles_cost += cost
        line_items.append(CostLineItem(
            description=f"{cut.label} ({cut.profile_code})",
            quantity=cut.quantity,
            unit_cost=_unit_cost(cost, cut.quantity),
            total_cost=cost,
        ))

    # ── Glass ─────────────────────────────────────────────────────────────────
    glass_total = glass_cost(glass, glass_price_per_sqm)
    line_items.append(CostLineItem(
        description=glass.composition_label,
        quantity=glass.quantity,
        unit_cost=_unit_cost(glass_total, glass.quantity),
        total_cost=glass_total,
    ))

    breakdown = CostBreakdown(
        total_cost=profiles_cost + glass_total + _ACCESSORIES_COST,
        profiles_cost=profiles_cost,
        glass_cost=glass_total,
        accessories_cost=_ACCESSORIES_COST,
        line_items=tuple(line_items),
        fallbacks=tuple(fallbacks),
    )

    logger.debug(
        f"Cost: profiles {profiles_cost:.2f} + glass {glass_total:.2f} = {breakdown.total_cost:.2f} "
        f"({len(line_items)} line items, {len(fallbacks)} fallbacks)"
    )
    return breakdown
