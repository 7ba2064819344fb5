"""
Estimate engine — live cost of an opening while it is being designed, and the
project-level roll-up of those estimates.

Pipeline per opening:
    rectangle → bounds → frame_cuts → simple_glass → costing total
"""
import time
from typing import List, Optional, Sequence, Union

from carpentry_core.exceptions import EmptyBatchError
from carpentry_core.models.carpentry_schema import (
    CarpentryProject,
    DesignUnit,
    OpeningSpecification,
    PriceSnapshot,
    SystemConfiguration,
)
from carpentry_core.models.results import (
    AppliedFallback,
    FallbackKind,
    OpeningEstimate,
    ProjectEstimate,
)
from carpentry_core.services.costing_engine import total
from carpentry_core.services.cut_engine import frame_cuts
from carpentry_core.services.geometry_engine import bounds, rectangle, require_positive
from carpentry_core.services.glass_engine import simple_glass
from carpentry_core.services.order_conversion_engine import SystemTable, resolve_system, snapshot_systems
from carpentry_core.services.logging_config import engine_logger, log_context

logger = engine_logger("estimate")


def estimate_opening(
    opening: Union[OpeningSpecification, DesignUnit],
    system: Optional[SystemConfiguration],
    prices: PriceSnapshot,
) -> OpeningEstimate:
    """
    Cut list, glass and cost for one opening.

    ``system=None`` falls back to the default configuration and the estimate
    carries an ``unknown_system`` fallback.
    """
    fallbacks: List[AppliedFallback] = []
    if system is None:
        system = SystemConfiguration(system_id=opening.system_id)
        fallbacks.append(AppliedFallback(
            kind=FallbackKind.UNKNOWN_SYSTEM,
            reference=opening.system_id or "",
            message="No system configuration supplied, default joint and zero deductions applied",
        ))

    require_positive("width_mm", opening.width_mm)
    require_positive("height_mm", opening.height_mm)

    # Only rectangular openings are designed today
    outline = bounds(rectangle(opening.width_mm, opening.height_mm))

    cuts = frame_cuts(outline.width, outline.height, system)
    glass = simple_glass(outline.width, outline.height, system, opening.glazing_composition)
    cost = total(cuts, glass, prices.profile_prices, prices.glass_price_per_sqm)
    fallbacks.extend(cost.fallbacks)

    unit_id = getattr(opening, "unit_id", None)
    logger.debug(
        f"Opening {opening.width_mm:g}×{opening.height_mm:g} × {opening.quantity}: "
        f"{cost.total_cost:.2f} per unit, {len(fallbacks)} fallbacks",
        extra=log_context(unit_id=unit_id),
    )

    return OpeningEstimate(
        cuts=tuple(cuts),
        glass=glass,
        cost=cost,
        quantity=opening.quantity,
        unit_id=unit_id,
        fallbacks=tuple(fallbacks),
    )


def estimate_project(
    project: CarpentryProject,
    units: Sequence[DesignUnit],
    system_configs_by_id: Optional[SystemTable],
    prices: PriceSnapshot,
) -> ProjectEstimate:
    """
    Estimate every unit of a project against one configuration snapshot and
    one price snapshot.

    Raises:
        EmptyBatchError: if the project has no units.
    """
    if not units:
        raise EmptyBatchError(project.name)

    started = time.perf_counter()
    snapshot = snapshot_systems(system_configs_by_id, (u.system_id for u in units))
    estimates: List[OpeningEstimate] = []
    fallbacks: List[AppliedFallback] = []

    for unit in units:
        cfg, fallback = resolve_system(unit.system_id, snapshot, unit.name or unit.unit_id)
        if fallback:
            fallbacks.append(fallback)
        estimate = estimate_opening(unit, cfg, prices)
        fallbacks.extend(estimate.fallbacks)
        estimates.append(estimate)

    result = ProjectEstimate(
        project_id=project.project_id,
        unit_estimates=tuple(estimates),
        fallbacks=tuple(fallbacks),
    )
    logger.info(
        f"Project '{project.name}': {len(estimates)} units estimated, total {result.total_cost:,.2f}",
        extra=log_context(
            project_id=project.project_id,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        ),
    )
    return result
