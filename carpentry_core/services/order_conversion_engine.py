"""
Order conversion engine — folds a carpentry project's design units into a
production order: one header plus one glass cut record per glazed unit.

The engine only computes the payload. Writing the header and records (and
assigning order numbers) is the order system's transaction.
"""
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from carpentry_core.config import (
    CUT_NOTES_TEMPLATE,
    CUT_STATUS_PENDING,
    MM_PER_M,
    ORDER_CLIENT_FALLBACK_TEMPLATE,
    ORDER_DESCRIPTION_TEMPLATE,
    ORDER_STATUS_PENDING,
)
from carpentry_core.exceptions import EmptyBatchError
from carpentry_core.models.carpentry_schema import (
    CarpentryProject,
    DesignUnit,
    GlazingComposition,
    SystemConfiguration,
)
from carpentry_core.models.results import (
    AppliedFallback,
    FallbackKind,
    OrderConversion,
    OrderHeader,
    ProductionCutRecord,
)
from carpentry_core.services.glass_engine import simple_glass
from carpentry_core.services.logging_config import engine_logger, log_context

logger = engine_logger("order-conversion")

SystemTable = Mapping[str, Union[SystemConfiguration, Dict[str, Any], None]]


def snapshot_systems(
    system_configs_by_id: Optional[SystemTable],
    system_ids: Optional[Iterable[Optional[str]]] = None,
) -> Dict[str, SystemConfiguration]:
    """
    Freeze the catalog's system configurations once, before any unit is
    processed, so every unit in the batch sees the same rules.

    With ``system_ids`` only those entries are read; catalog systems the batch
    never references are not validated.
    """
    catalog = system_configs_by_id or {}
    if system_ids is None:
        wanted = list(catalog)
    else:
        wanted = sorted({system_id for system_id in system_ids if system_id and system_id in catalog})

    snapshot: Dict[str, SystemConfiguration] = {}
    for system_id in wanted:
        cfg = catalog[system_id]
        if isinstance(cfg, SystemConfiguration):
            snapshot[system_id] = cfg
        else:
            snapshot[system_id] = SystemConfiguration.from_blob(cfg, system_id=system_id)
    return snapshot


def resolve_system(
    system_id: Optional[str],
    snapshot: Mapping[str, SystemConfiguration],
    unit_label: str = "",
) -> Tuple[SystemConfiguration, Optional[AppliedFallback]]:
    """
    Look up a unit's system. Unknown or missing ids resolve to the default
    configuration (zero deductions, 45° joints) plus a fallback record.
    """
    cfg = snapshot.get(system_id) if system_id else None
    if cfg is not None:
        return cfg, None

    reference = system_id or ""
    logger.warning(f"Unit '{unit_label}': system '{reference}' not in configuration snapshot, using defaults")
    return SystemConfiguration(system_id=system_id), AppliedFallback(
        kind=FallbackKind.UNKNOWN_SYSTEM,
        reference=reference,
        message=f"{unit_label}: system '{reference}' unknown, zero deductions applied",
    )


def build_order_header(project: CarpentryProject, records: Sequence[ProductionCutRecord]) -> OrderHeader:
    total_cuts = sum(r.quantity for r in records)
    total_area_m2 = sum((r.width_mm / MM_PER_M) * (r.height_mm / MM_PER_M) * r.quantity for r in records)
    return OrderHeader(
        project_id=project.project_id,
        client_name=project.client_name or ORDER_CLIENT_FALLBACK_TEMPLATE.format(project_name=project.name),
        description=ORDER_DESCRIPTION_TEMPLATE.format(project_name=project.name),
        address=project.client_address,
        status=ORDER_STATUS_PENDING,
        total_cuts=total_cuts,
        total_area_m2=total_area_m2,
    )


def convert(
    project: CarpentryProject,
    units: Sequence[DesignUnit],
    system_configs_by_id: Optional[SystemTable] = None,
) -> OrderConversion:
    """
    Convert a project into a production order payload.

    Units without a glazing assignment are skipped (no record, no error).
    Each glazed unit yields one record sized by simple_glass() with
    quantity = unit.quantity × pane quantity.

    Raises:
        EmptyBatchError: if ``units`` is empty (nothing to convert).
        InvalidGeometryError: if any glazed unit has invalid dimensions or
            deductions; no partial result is returned.
    """
    if not units:
        raise EmptyBatchError(project.name)

    started = time.perf_counter()
    # Unglazed units are never sized, so their systems are not read
    snapshot = snapshot_systems(system_configs_by_id, (u.system_id for u in units if u.glass_type_id))

    records: List[ProductionCutRecord] = []
    fallbacks: List[AppliedFallback] = []
    skipped: List[str] = []

    for unit in units:
        if not unit.glass_type_id:
            logger.debug(
                f"Unit '{unit.name}' ({unit.unit_id}) has no glass assigned, skipped",
                extra=log_context(project_id=project.project_id, unit_id=unit.unit_id),
            )
            skipped.append(unit.unit_id)
            continue

        cfg, fallback = resolve_system(unit.system_id, snapshot, unit.name or unit.unit_id)
        if fallback:
            fallbacks.append(fallback)

        composition = unit.glazing_composition
        glass = simple_glass(unit.width_mm, unit.height_mm, cfg, composition)

        glass_type_id: Optional[str] = unit.glass_type_id
        if composition is GlazingComposition.INSULATED:
            # Outer/inner pane and chamber selection is not modelled for DVH units
            glass_type_id = None
            fallbacks.append(AppliedFallback(
                kind=FallbackKind.INSULATED_PANES_UNSPECIFIED,
                reference=unit.unit_id,
                message=f"{unit.name}: insulated unit panes and spacer left unspecified",
            ))

        records.append(ProductionCutRecord(
            unit_id=unit.unit_id,
            cut_type=composition.value,
            glass_type_id=glass_type_id,
            width_mm=glass.width_mm,
            height_mm=glass.height_mm,
            quantity=unit.quantity * glass.quantity,
            notes=CUT_NOTES_TEMPLATE.format(unit_name=unit.name, project_name=project.name),
            status=CUT_STATUS_PENDING,
        ))

    header = build_order_header(project, records)

    logger.info(
        f"Project '{project.name}': {len(records)} cut records from {len(units)} units "
        f"({len(skipped)} skipped, {len(fallbacks)} fallbacks), {header.total_area_m2:.2f} m²",
        extra=log_context(
            project_id=project.project_id,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        ),
    )

    return OrderConversion(
        order_header=header,
        cut_records=tuple(records),
        fallbacks=tuple(fallbacks),
        skipped_unit_ids=tuple(skipped),
    )
