"""
Input schemas for the carpentry calculation core.

Every model is frozen: the engines receive configuration and prices by value
and never mutate them. Schemaless blobs written by older designer versions are
accepted through the legacy key maps, so a missing field resolves to the
documented default here rather than deep inside an engine.
"""
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from carpentry_core.config import (
    DEFAULT_DEDUCTION_MM,
    DEFAULT_FRAME_PROFILE_CODE,
    DEFAULT_JOINT_ANGLE_DEG,
    LEGACY_SYSTEM_KEYS,
)

_LEGACY_PRICE_KEYS: Dict[str, str] = {
    "price": "price_per_unit",
    "pricePerUnit": "price_per_unit",
    "weight": "weight_per_meter_kg",
    "weightPerMeterKg": "weight_per_meter_kg",
    "isByWeight": "priced_by_weight",
    "pricedByWeight": "priced_by_weight",
}


def _remap_blob(data: Any, key_map: Dict[str, str]) -> Any:
    """Rename legacy keys and drop null values so field defaults apply."""
    if not isinstance(data, dict):
        return data
    remapped: Dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        target = key_map.get(key, key)
        # Explicit typed keys win over legacy spellings
        if target in remapped and key != target:
            continue
        remapped[target] = value
    return remapped


class OpeningType(str, Enum):
    SLIDING = "sliding"
    FIXED = "fixed"
    CASEMENT = "casement"
    PROJECTING = "projecting"


class GlazingComposition(str, Enum):
    """Single pane or insulated glazing unit (DVH)."""
    SIMPLE = "simple"
    INSULATED = "insulated"

    @classmethod
    def parse(cls, value: Union[str, "GlazingComposition", None]) -> "GlazingComposition":
        if isinstance(value, cls):
            return value
        if not value:
            return cls.SIMPLE
        tag = str(value).strip().lower()
        if tag == "dvh":
            return cls.INSULATED
        return cls(tag)


class SystemConfiguration(BaseModel):
    """
    One manufacturing line (profile system) and the rule set the calculators consume.
    Owned by the external catalog; read-only for the duration of a calculation.
    """
    model_config = ConfigDict(frozen=True)

    system_id: Optional[str] = Field(None, description="Catalog identifier of the system")
    name: str = Field("", description="e.g., Modena, A30 New")
    joint_angle_deg: float = Field(
        DEFAULT_JOINT_ANGLE_DEG, gt=0, le=90,
        description="Frame corner joint angle in degrees (45 = mitre, 90 = square)",
    )
    deduction_width_mm: float = Field(
        DEFAULT_DEDUCTION_MM, ge=0,
        description="Subtracted from the opening width to obtain the pane width",
    )
    deduction_height_mm: float = Field(
        DEFAULT_DEDUCTION_MM, ge=0,
        description="Subtracted from the opening height to obtain the pane height",
    )
    frame_profile_code: str = Field(
        DEFAULT_FRAME_PROFILE_CODE,
        description="Profile code used for the four frame members",
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_blob(cls, data: Any) -> Any:
        return _remap_blob(data, LEGACY_SYSTEM_KEYS)

    @classmethod
    def from_blob(cls, blob: Optional[Dict[str, Any]], system_id: Optional[str] = None) -> "SystemConfiguration":
        """Build a configuration from a schemaless catalog blob (``None`` → all defaults)."""
        data = dict(blob or {})
        if system_id is not None:
            data.setdefault("system_id", system_id)
        return cls.model_validate(data)


class ProfilePrice(BaseModel):
    """Unit price for one profile code, either per kg or per linear metre."""
    model_config = ConfigDict(frozen=True)

    price_per_unit: float = Field(..., ge=0, description="Price per kg when priced by weight, else per metre")
    weight_per_meter_kg: Optional[float] = Field(None, ge=0, description="Linear weight in kg per meter")
    priced_by_weight: bool = Field(False, description="True when the supplier bills by weight")

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_blob(cls, data: Any) -> Any:
        return _remap_blob(data, _LEGACY_PRICE_KEYS)

    @model_validator(mode="after")
    def _weight_required_when_priced_by_weight(self) -> "ProfilePrice":
        if self.priced_by_weight and self.weight_per_meter_kg is None:
            raise ValueError("weight_per_meter_kg is required when priced_by_weight is true")
        return self


class PriceSnapshot(BaseModel):
    """One consistent set of prices, fetched once before a batch is processed."""
    model_config = ConfigDict(frozen=True)

    profile_prices: Dict[str, ProfilePrice] = Field(default_factory=dict)
    glass_price_per_sqm: float = Field(0.0, ge=0, description="Glass price per square meter")


class OpeningSpecification(BaseModel):
    """One window/door opening to be calculated."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    width_mm: float = Field(..., allow_inf_nan=False, validation_alias=AliasChoices("width_mm", "width", "widthMm"))
    height_mm: float = Field(..., allow_inf_nan=False, validation_alias=AliasChoices("height_mm", "height", "heightMm"))
    quantity: int = Field(1, ge=1, description="Count of identical units")
    opening_type: OpeningType = OpeningType.SLIDING
    glazing_composition: GlazingComposition = Field(
        GlazingComposition.SIMPLE,
        validation_alias=AliasChoices("glazing_composition", "glass_composition"),
    )
    system_id: Optional[str] = None

    @field_validator("glazing_composition", mode="before")
    @classmethod
    def _parse_composition(cls, value: Any) -> GlazingComposition:
        return GlazingComposition.parse(value)


class DesignUnit(OpeningSpecification):
    """A named opening inside a carpentry project, optionally with glass assigned."""
    unit_id: str
    name: str = ""
    glass_type_id: Optional[str] = Field(None, description="Glazing assignment; None while undecided")


class CarpentryProject(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    project_id: str = Field(..., validation_alias=AliasChoices("project_id", "id"))
    name: str
    project_number: Optional[Union[int, str]] = None
    client_name: Optional[str] = None
    client_address: Optional[str] = None
