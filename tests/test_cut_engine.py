"""
test_cut_engine.py — Unit tests for frame_cuts().

Tests cover:
  - Exactly two entries: horizontal pair (width) and vertical pair (height)
  - Joint angle applied at both ends, default 45°
  - Lengths independent of joint angle (no square-joint correction)
  - Profile code taken from the system
  - Rejection of non-positive dimensions
  - Determinism
"""

import pytest

from carpentry_core.config import DEFAULT_FRAME_PROFILE_CODE
from carpentry_core.exceptions import InvalidGeometryError
from carpentry_core.models.carpentry_schema import SystemConfiguration
from carpentry_core.services.cut_engine import frame_cuts


class TestFrameCuts:

    def test_reference_opening(self, mitre_system):
        """1500×1200 → [1500 ×2, 1200 ×2]."""
        cuts = frame_cuts(1500, 1200, mitre_system)
        assert [(c.length_mm, c.quantity) for c in cuts] == [(1500, 2), (1200, 2)]
        assert cuts[0].label == "Frame Horizontal"
        assert cuts[1].label == "Frame Vertical"

    @pytest.mark.parametrize("width,height", [(1, 1), (600, 2400), (3000.5, 450.25)])
    def test_always_two_entries(self, width, height, mitre_system):
        cuts = frame_cuts(width, height, mitre_system)
        assert len(cuts) == 2
        assert cuts[0].length_mm == width
        assert cuts[1].length_mm == height
        assert all(c.quantity == 2 for c in cuts)

    def test_joint_angle_symmetric(self, square_system):
        for cut in frame_cuts(1000, 1000, square_system):
            assert cut.angle_start_deg == 90
            assert cut.angle_end_deg == 90

    def test_default_angle_is_45(self):
        """No system supplied → defaults (45° joints)."""
        for cut in frame_cuts(1000, 500):
            assert cut.angle_start_deg == cut.angle_end_deg == 45.0
            assert cut.profile_code == DEFAULT_FRAME_PROFILE_CODE

    def test_blob_without_joint_uses_45(self):
        cfg = SystemConfiguration.from_blob({"glass_deduction_w": 10})
        assert frame_cuts(1000, 500, cfg)[0].angle_start_deg == 45.0

    def test_lengths_not_corrected_for_square_joint(self, mitre_system, square_system):
        """
        Member lengths equal the opening dimensions whatever the joint angle;
        a 90° system gets the same lengths as a 45° one.
        """
        mitre = frame_cuts(1500, 1200, mitre_system)
        square = frame_cuts(1500, 1200, square_system)
        assert [c.length_mm for c in mitre] == [c.length_mm for c in square]

    def test_profile_code_from_system(self):
        cfg = SystemConfiguration(frame_profile_code="MOD-101")
        assert {c.profile_code for c in frame_cuts(800, 600, cfg)} == {"MOD-101"}

    @pytest.mark.parametrize("width,height,field", [
        (0, 1200, "width_mm"),
        (-10, 1200, "width_mm"),
        (1500, 0, "height_mm"),
        (1500, -0.5, "height_mm"),
    ])
    def test_non_positive_dimensions_rejected(self, width, height, field, mitre_system):
        with pytest.raises(InvalidGeometryError) as exc:
            frame_cuts(width, height, mitre_system)
        assert exc.value.field == field

    def test_deterministic(self, mitre_system):
        assert frame_cuts(1234, 987, mitre_system) == frame_cuts(1234, 987, mitre_system)

    def test_as_dict_shape(self, mitre_system):
        row = frame_cuts(1500, 1200, mitre_system)[0].as_dict()
        assert row == {
            "profileCode": "FRAME_PROFILE",
            "lengthMm": 1500,
            "angleStartDeg": 45,
            "angleEndDeg": 45,
            "quantity": 2,
            "label": "Frame Horizontal",
        }
