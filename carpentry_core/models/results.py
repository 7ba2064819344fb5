"""
Output records produced by the calculation engines.

All records are frozen dataclasses. ``as_dict()`` renders the shape handed to
the designer UI and to the external order writer.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from carpentry_core.config import MM_PER_M


class FallbackKind(str, Enum):
    MISSING_PROFILE_PRICE = "missing_profile_price"
    INVALID_PROFILE_PRICE = "invalid_profile_price"
    UNKNOWN_SYSTEM = "unknown_system"
    INSULATED_PANES_UNSPECIFIED = "insulated_panes_unspecified"


@dataclass(frozen=True)
class AppliedFallback:
    """A silent substitution made while computing a result (skip or default)."""
    kind: FallbackKind
    reference: str
    message: str

    def as_dict(self) -> dict:
        return {"kind": self.kind.value, "reference": self.reference, "message": self.message}


@dataclass(frozen=True)
class CutSpec:
    profile_code: str
    length_mm: float
    angle_start_deg: float
    angle_end_deg: float
    quantity: int
    label: str

    def as_dict(self) -> dict:
        return {
            "profileCode": self.profile_code,
            "lengthMm": self.length_mm,
            "angleStartDeg": self.angle_start_deg,
            "angleEndDeg": self.angle_end_deg,
            "quantity": self.quantity,
            "label": self.label,
        }


@dataclass(frozen=True)
class GlassResult:
    width_mm: float
    height_mm: float
    quantity: int
    composition_label: str

    @property
    def area_sqm(self) -> float:
        """Area of a single pane."""
        return (self.width_mm / MM_PER_M) * (self.height_mm / MM_PER_M)

    def as_dict(self) -> dict:
        return {
            "widthMm": self.width_mm,
            "heightMm": self.height_mm,
            "quantity": self.quantity,
            "compositionLabel": self.composition_label,
        }


@dataclass(frozen=True)
class CostLineItem:
    description: str
    quantity: float
    unit_cost: float
    total_cost: float

    def as_dict(self) -> dict:
        return {
            "description": self.description,
            "quantity": self.quantity,
            "unitCost": self.unit_cost,
            "totalCost": self.total_cost,
        }


@dataclass(frozen=True)
class CostBreakdown:
    total_cost: float
    profiles_cost: float
    glass_cost: float
    accessories_cost: float
    line_items: Tuple[CostLineItem, ...] = ()
    fallbacks: Tuple[AppliedFallback, ...] = ()

    @property
    def is_degraded(self) -> bool:
        return bool(self.fallbacks)

    def as_dict(self) -> dict:
        return {
            "totalCost": self.total_cost,
            "profilesCost": self.profiles_cost,
            "glassCost": self.glass_cost,
            "accessoriesCost": self.accessories_cost,
            "lineItems": [item.as_dict() for item in self.line_items],
            "fallbacks": [fb.as_dict() for fb in self.fallbacks],
        }


@dataclass(frozen=True)
class OrderHeader:
    """Production order header; the order number is assigned by the order writer."""
    project_id: str
    client_name: str
    description: str
    address: Optional[str]
    status: str
    total_cuts: int = 0
    total_area_m2: float = 0.0

    def as_dict(self) -> dict:
        return {
            "project_id": self.project_id,
            "client_name": self.client_name,
            "description": self.description,
            "address": self.address,
            "status": self.status,
            "total_cuts": self.total_cuts,
            "total_area_m2": self.total_area_m2,
        }


@dataclass(frozen=True)
class ProductionCutRecord:
    unit_id: str
    cut_type: str
    glass_type_id: Optional[str]
    width_mm: float
    height_mm: float
    quantity: int
    notes: str
    status: str
    # Insulated-unit pane and spacer identities are not resolved yet
    dvh_outer_glass_id: Optional[str] = None
    dvh_inner_glass_id: Optional[str] = None
    dvh_chamber_id: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "unit_id": self.unit_id,
            "cut_type": self.cut_type,
            "glass_type_id": self.glass_type_id,
            "dvh_outer_glass_id": self.dvh_outer_glass_id,
            "dvh_inner_glass_id": self.dvh_inner_glass_id,
            "dvh_chamber_id": self.dvh_chamber_id,
            "width_mm": self.width_mm,
            "height_mm": self.height_mm,
            "quantity": self.quantity,
            "status": self.status,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class OrderConversion:
    order_header: OrderHeader
    cut_records: Tuple[ProductionCutRecord, ...] = ()
    fallbacks: Tuple[AppliedFallback, ...] = ()
    skipped_unit_ids: Tuple[str, ...] = ()

    def as_dict(self) -> dict:
        return {
            "orderHeader": self.order_header.as_dict(),
            "cutRecords": [record.as_dict() for record in self.cut_records],
            "fallbacks": [fb.as_dict() for fb in self.fallbacks],
            "skippedUnitIds": list(self.skipped_unit_ids),
        }


@dataclass(frozen=True)
class OpeningEstimate:
    """Live design result for one opening: cuts, glass and cost."""
    cuts: Tuple[CutSpec, ...]
    glass: GlassResult
    cost: CostBreakdown
    quantity: int = 1
    unit_id: Optional[str] = None
    fallbacks: Tuple[AppliedFallback, ...] = ()

    @property
    def total_cost(self) -> float:
        """Cost of all identical units in the opening."""
        return self.cost.total_cost * self.quantity

    def as_dict(self) -> dict:
        return {
            "unitId": self.unit_id,
            "quantity": self.quantity,
            "cuts": [cut.as_dict() for cut in self.cuts],
            "glass": self.glass.as_dict(),
            "cost": self.cost.as_dict(),
            "totalCost": self.total_cost,
            "fallbacks": [fb.as_dict() for fb in self.fallbacks],
        }


@dataclass(frozen=True)
class ProjectEstimate:
    project_id: str
    unit_estimates: Tuple[OpeningEstimate, ...] = ()
    fallbacks: Tuple[AppliedFallback, ...] = ()

    @property
    def total_cost(self) -> float:
        return sum(estimate.total_cost for estimate in self.unit_estimates)

    def as_dict(self) -> dict:
        return {
            "projectId": self.project_id,
            "units": [estimate.as_dict() for estimate in self.unit_estimates],
            "totalCost": self.total_cost,
            "fallbacks": [fb.as_dict() for fb in self.fallbacks],
        }
