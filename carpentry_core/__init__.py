"""
Carpentry calculation core: frame cut lists, glass pane sizing, cost
breakdowns and project-to-order conversion for window/door openings.
"""
from carpentry_core.exceptions import CarpentryError, EmptyBatchError, InvalidGeometryError
from carpentry_core.models.carpentry_schema import (
    CarpentryProject,
    DesignUnit,
    GlazingComposition,
    OpeningSpecification,
    OpeningType,
    PriceSnapshot,
    ProfilePrice,
    SystemConfiguration,
)
from carpentry_core.models.results import (
    AppliedFallback,
    CostBreakdown,
    CostLineItem,
    CutSpec,
    FallbackKind,
    GlassResult,
    OpeningEstimate,
    OrderConversion,
    OrderHeader,
    ProductionCutRecord,
    ProjectEstimate,
)
from carpentry_core.services.costing_engine import total
from carpentry_core.services.cut_engine import frame_cuts
from carpentry_core.services.estimate_engine import estimate_opening, estimate_project
from carpentry_core.services.geometry_engine import Bounds, Point2D, Polygon, bounds, rectangle
from carpentry_core.services.glass_engine import polygon_glass, simple_glass
from carpentry_core.services.logging_config import JSONFormatter, log_context, setup_logging
from carpentry_core.services.order_conversion_engine import convert

__version__ = "0.1.0"
