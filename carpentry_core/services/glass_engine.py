"""
Glass engine — pane dimensions for the glazing infill of an opening.

Pane size = opening size − system deduction (how far the frame and bead
overlap the glass edge). Composition only changes the label: an insulated
unit's outer pane, inner pane and spacer are not modelled here.
"""
from typing import Optional, Union

from carpentry_core.config import (
    GLASS_LABEL_TEMPLATE,
    IRREGULAR_GLASS_LABEL,
    IRREGULAR_GLASS_MARGIN_MM,
)
from carpentry_core.models.carpentry_schema import GlazingComposition, SystemConfiguration
from carpentry_core.models.results import GlassResult
from carpentry_core.services.geometry_engine import Polygon, bounds, require_positive
from carpentry_core.services.logging_config import engine_logger

logger = engine_logger("glass")


def composition_label(composition: Union[GlazingComposition, str, None]) -> str:
    """'Glass SIMPLE' / 'Glass INSULATED'."""
    tag = GlazingComposition.parse(composition)
    return GLASS_LABEL_TEMPLATE.format(composition=tag.value.upper())


def simple_glass(
    opening_width_mm: float,
    opening_height_mm: float,
    system: Optional[SystemConfiguration] = None,
    composition: Union[GlazingComposition, str, None] = GlazingComposition.SIMPLE,
) -> GlassResult:
    """
    Single rectangular pane for a rectangular opening.

    Args:
        opening_width_mm:  Opening (or sash) width in mm.
        opening_height_mm: Opening (or sash) height in mm.
        system:            Deduction rules. ``None`` → zero deductions.
        composition:       'simple' | 'insulated' (legacy 'dvh' accepted).

    Returns:
        GlassResult with quantity 1.

    Raises:
        InvalidGeometryError: non-positive opening, or a deduction that leaves
            a non-positive pane.
    """
    require_positive("opening_width_mm", opening_width_mm)
    require_positive("opening_height_mm", opening_height_mm)

    rules = system or SystemConfiguration()
    pane_w = opening_width_mm - rules.deduction_width_mm
    pane_h = opening_height_mm - rules.deduction_height_mm

    require_positive(
        "width_mm", pane_w,
        f"Deduction {rules.deduction_width_mm} mm exceeds opening width {opening_width_mm} mm.",
    )
    require_positive(
        "height_mm", pane_h,
        f"Deduction {rules.deduction_height_mm} mm exceeds opening height {opening_height_mm} mm.",
    )

    return GlassResult(
        width_mm=pane_w,
        height_mm=pane_h,
        quantity=1,
        composition_label=composition_label(composition),
    )


def polygon_glass(polygon: Polygon) -> GlassResult:
    """
    APPROXIMATION for irregular openings: bounding box minus a flat 10 mm
    margin per dimension. Not a true irregular cut; the glazier still needs
    the outline itself.

    Raises:
        InvalidGeometryError: if the shape is too small to leave a positive pane.
    """
    box = bounds(polygon)
    pane_w = box.width - IRREGULAR_GLASS_MARGIN_MM
    pane_h = box.height - IRREGULAR_GLASS_MARGIN_MM

    require_positive("width_mm", pane_w, f"Bounding box width {box.width} mm is below the glazing margin.")
    require_positive("height_mm", pane_h, f"Bounding box height {box.height} mm is below the glazing margin.")

    logger.debug(
        f"Irregular pane approximated from {len(polygon.points)}-point outline: "
        f"{pane_w:.1f} x {pane_h:.1f} mm"
    )

    return GlassResult(
        width_mm=pane_w,
        height_mm=pane_h,
        quantity=1,
        composition_label=IRREGULAR_GLASS_LABEL,
    )
