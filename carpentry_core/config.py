"""
Carpentry core configuration — single source of truth for defaults, constants
and label templates.

Import from here in all engines rather than hardcoding values.
"""
from __future__ import annotations

# ── System rule defaults ──────────────────────────────────────────────────────
# Applied when a system configuration blob omits the field.
DEFAULT_JOINT_ANGLE_DEG: float = 45.0
DEFAULT_DEDUCTION_MM: float = 0.0
DEFAULT_FRAME_PROFILE_CODE: str = "FRAME_PROFILE"

# Legacy blob keys written by older designer versions → typed field name
LEGACY_SYSTEM_KEYS: dict[str, str] = {
    "jointAngle":        "joint_angle_deg",
    "frame_joint":       "joint_angle_deg",
    "deductionWidthMm":  "deduction_width_mm",
    "glass_deduction_w": "deduction_width_mm",
    "deductionHeightMm": "deduction_height_mm",
    "glass_deduction_h": "deduction_height_mm",
}


# ── Frame geometry ────────────────────────────────────────────────────────────
# A rectangular frame has one pair of horizontal and one pair of vertical members.
FRAME_MEMBERS_PER_DIRECTION: int = 2

# Flat margin subtracted from an irregular opening's bounding box (mm per dimension)
IRREGULAR_GLASS_MARGIN_MM: float = 10.0


# ── Units & tolerances ────────────────────────────────────────────────────────
MM_PER_M: float = 1000.0
COST_TOLERANCE: float = 1e-6


# ── Labels ────────────────────────────────────────────────────────────────────
FRAME_HORIZONTAL_LABEL: str = "Frame Horizontal"
FRAME_VERTICAL_LABEL: str = "Frame Vertical"
GLASS_LABEL_TEMPLATE: str = "Glass {composition}"
IRREGULAR_GLASS_LABEL: str = "Irregular Glass (approximate dimensions)"


# ── Production order defaults ─────────────────────────────────────────────────
ORDER_STATUS_PENDING: str = "Pending"
CUT_STATUS_PENDING: str = "pending"
ORDER_CLIENT_FALLBACK_TEMPLATE: str = "Project {project_name}"
ORDER_DESCRIPTION_TEMPLATE: str = "Generated from carpentry project: {project_name}"
CUT_NOTES_TEMPLATE: str = "{unit_name} ({project_name})"
