"""Cut engine — structural profile cut list for a rectangular frame."""
from typing import List, Optional

from carpentry_core.config import (
    DEFAULT_JOINT_ANGLE_DEG,
    FRAME_HORIZONTAL_LABEL,
    FRAME_MEMBERS_PER_DIRECTION,
    FRAME_VERTICAL_LABEL,
)
from carpentry_core.models.carpentry_schema import SystemConfiguration
from carpentry_core.models.results import CutSpec
from carpentry_core.services.geometry_engine import require_positive
from carpentry_core.services.logging_config import engine_logger

logger = engine_logger("cuts")


def frame_cuts(
    width_mm: float,
    height_mm: float,
    system: Optional[SystemConfiguration] = None,
) -> List[CutSpec]:
    """
    Cut list for the four members of a rectangular frame.

    Returns exactly two entries: the horizontal pair (length = opening width)
    and the vertical pair (length = opening height), each quantity 2. The
    system joint angle is applied at both ends of every member.

    Lengths are the raw opening dimensions whatever the joint angle. A square
    (90°) joint would need the members shortened by the profile face width;
    that correction is NOT applied.

    Raises:
        InvalidGeometryError: if width or height is not strictly positive.
    """
    require_positive("width_mm", width_mm)
    require_positive("height_mm", height_mm)

    cfg = system or SystemConfiguration()
    angle = cfg.joint_angle_deg

    if angle != DEFAULT_JOINT_ANGLE_DEG:
        logger.debug(
            f"System '{cfg.name or cfg.system_id}' uses {angle}° joints; "
            f"member lengths are not corrected for the joint"
        )

    return [
        CutSpec(
            profile_code=cfg.frame_profile_code,
            length_mm=width_mm,
            angle_start_deg=angle,
            angle_end_deg=angle,
            quantity=FRAME_MEMBERS_PER_DIRECTION,
            label=FRAME_HORIZONTAL_LABEL,
        ),
        CutSpec(
            profile_code=cfg.frame_profile_code,
            length_mm=height_mm,
            angle_start_deg=angle,
            angle_end_deg=angle,
            quantity=FRAME_MEMBERS_PER_DIRECTION,
            label=FRAME_VERTICAL_LABEL,
        ),
    ]
