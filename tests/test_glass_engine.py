"""
test_glass_engine.py — Unit tests for the glass engine.

Tests cover:
  - simple_glass deduction arithmetic and defaults
  - Composition labels (simple, insulated, legacy 'dvh')
  - Rejection of non-positive openings and over-deduction
  - polygon_glass bounding-box approximation and its margin
"""

import pytest

from carpentry_core.exceptions import InvalidGeometryError
from carpentry_core.models.carpentry_schema import GlazingComposition, SystemConfiguration
from carpentry_core.services.geometry_engine import Polygon, rectangle
from carpentry_core.services.glass_engine import composition_label, polygon_glass, simple_glass


class TestSimpleGlass:

    def test_reference_opening(self, mitre_system):
        """1500×1200 with 100/100 deductions → 1400×1100, quantity 1."""
        glass = simple_glass(1500, 1200, mitre_system, "simple")
        assert glass.width_mm == 1400
        assert glass.height_mm == 1100
        assert glass.quantity == 1
        assert glass.composition_label == "Glass SIMPLE"

    @pytest.mark.parametrize("width,height", [(500, 400), (2400, 1800), (61, 81)])
    def test_deduction_property(self, width, height, square_system):
        glass = simple_glass(width, height, square_system)
        assert glass.width_mm == width - square_system.deduction_width_mm
        assert glass.height_mm == height - square_system.deduction_height_mm

    def test_missing_deductions_default_to_zero(self):
        cfg = SystemConfiguration.from_blob({"frame_joint": 90})
        glass = simple_glass(1000, 800, cfg)
        assert (glass.width_mm, glass.height_mm) == (1000, 800)

    def test_no_system_means_no_deduction(self):
        glass = simple_glass(1000, 800)
        assert (glass.width_mm, glass.height_mm) == (1000, 800)

    def test_insulated_label(self, mitre_system):
        assert simple_glass(1500, 1200, mitre_system, GlazingComposition.INSULATED).composition_label == "Glass INSULATED"

    def test_legacy_dvh_tag_is_insulated(self, mitre_system):
        assert simple_glass(1500, 1200, mitre_system, "DVH").composition_label == "Glass INSULATED"

    def test_composition_does_not_change_size(self, mitre_system):
        simple = simple_glass(1500, 1200, mitre_system, "simple")
        insulated = simple_glass(1500, 1200, mitre_system, "insulated")
        assert (simple.width_mm, simple.height_mm) == (insulated.width_mm, insulated.height_mm)

    def test_unknown_composition_rejected(self):
        with pytest.raises(ValueError):
            composition_label("triple")

    def test_deduction_equal_to_width_rejected(self):
        """A pane of zero width is an input error."""
        cfg = SystemConfiguration(deduction_width_mm=800)
        with pytest.raises(InvalidGeometryError) as exc:
            simple_glass(800, 1000, cfg)
        assert exc.value.field == "width_mm"
        assert exc.value.value == 0

    def test_deduction_exceeding_height_rejected(self):
        cfg = SystemConfiguration(deduction_height_mm=1200)
        with pytest.raises(InvalidGeometryError, match="exceeds opening height"):
            simple_glass(800, 1000, cfg)

    @pytest.mark.parametrize("width,height", [(0, 1000), (1000, -1)])
    def test_non_positive_opening_rejected(self, width, height):
        with pytest.raises(InvalidGeometryError):
            simple_glass(width, height)

    def test_area_sqm(self, mitre_system):
        assert abs(simple_glass(1500, 1200, mitre_system).area_sqm - 1.54) < 1e-9


class TestPolygonGlass:

    def test_rectangle_minus_margin(self):
        glass = polygon_glass(rectangle(1000, 800))
        assert (glass.width_mm, glass.height_mm) == (990, 790)
        assert glass.quantity == 1

    def test_labelled_as_approximation(self):
        assert "approximate" in polygon_glass(rectangle(500, 500)).composition_label

    def test_irregular_uses_bounding_box(self):
        arch = Polygon.from_coords([(0, 0), (1000, 0), (1000, 1500), (500, 1800), (0, 1500)])
        glass = polygon_glass(arch)
        assert (glass.width_mm, glass.height_mm) == (990, 1790)

    def test_empty_polygon_rejected(self):
        """Zero bounding box minus the margin cannot be a pane."""
        with pytest.raises(InvalidGeometryError):
            polygon_glass(Polygon())

    def test_shape_smaller_than_margin_rejected(self):
        with pytest.raises(InvalidGeometryError):
            polygon_glass(rectangle(10, 500))
