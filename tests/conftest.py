"""
conftest.py — Shared pytest fixtures for the carpentry core test suite.

All tests in this suite are pure unit tests that exercise the calculation
functions in isolation; no database or external service fixtures exist.

Import-path bootstrapping:
    The repository root is inserted into sys.path so that ``carpentry_core.*``
    imports resolve without an install, regardless of where pytest is invoked.
"""

import sys
import os
import pytest

# ---------------------------------------------------------------------------
# Ensure the repository root is on the import path before any package imports.
# ---------------------------------------------------------------------------
_ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)


# ---------------------------------------------------------------------------
# System configuration fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mitre_system():
    """
    Mitre-jointed system with the deductions the designer uses by default:
      joint = 45°, deduction W = 100 mm, deduction H = 100 mm.
    """
    from carpentry_core.models.carpentry_schema import SystemConfiguration
    return SystemConfiguration(
        system_id="sys-modena",
        name="Modena",
        joint_angle_deg=45,
        deduction_width_mm=100,
        deduction_height_mm=100,
    )


@pytest.fixture
def square_system():
    """Square-jointed (90°) system with asymmetric deductions 60 × 80 mm."""
    from carpentry_core.models.carpentry_schema import SystemConfiguration
    return SystemConfiguration(
        system_id="sys-a30",
        name="A30 New",
        joint_angle_deg=90,
        deduction_width_mm=60,
        deduction_height_mm=80,
    )


# ---------------------------------------------------------------------------
# Price fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def weight_price_table():
    """FRAME_PROFILE billed by weight: 15 per kg, 1.2 kg/m."""
    return {
        "FRAME_PROFILE": {"pricePerUnit": 15, "weightPerMeterKg": 1.2, "pricedByWeight": True},
    }


@pytest.fixture
def price_snapshot(weight_price_table):
    """Weight-priced frame profile plus glass at 45 per m²."""
    from carpentry_core.models.carpentry_schema import PriceSnapshot
    return PriceSnapshot(profile_prices=weight_price_table, glass_price_per_sqm=45.0)


# ---------------------------------------------------------------------------
# Project fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def project():
    from carpentry_core.models.carpentry_schema import CarpentryProject
    return CarpentryProject(
        project_id="proj-001",
        name="Casa Rivera",
        project_number=17,
        client_name="Laura Rivera",
        client_address="Av. Libertador 1200",
    )


@pytest.fixture
def system_blobs():
    """
    Schemaless configuration blobs as stored by the catalog, keyed by system id.
    Uses the legacy key spellings written by the original designer.
    """
    return {
        "sys-modena": {"frame_joint": 45, "glass_deduction_w": 100, "glass_deduction_h": 100},
        "sys-a30": {"frame_joint": 90, "glass_deduction_w": 60, "glass_deduction_h": 80},
        "sys-bare": {},
    }


@pytest.fixture
def project_units():
    """
    Four units: three glazed (one insulated), one without glass yet.

      u1: 1500×1200 ×2, Modena, simple, glass assigned
      u2: 1000×2100 ×1, A30, insulated, glass assigned
      u3:  800×600  ×3, Modena, no glass assigned → skipped
      u4:  900×900  ×1, unknown system, simple, glass assigned
    """
    from carpentry_core.models.carpentry_schema import DesignUnit
    return [
        DesignUnit(unit_id="u1", name="Living Window", width_mm=1500, height_mm=1200, quantity=2,
                   system_id="sys-modena", glass_type_id="float-4mm", glazing_composition="simple"),
        DesignUnit(unit_id="u2", name="Balcony Door", width_mm=1000, height_mm=2100, quantity=1,
                   system_id="sys-a30", glass_type_id="float-6mm", glazing_composition="dvh",
                   opening_type="casement"),
        DesignUnit(unit_id="u3", name="Bathroom Window", width_mm=800, height_mm=600, quantity=3,
                   system_id="sys-modena", glass_type_id=None),
        DesignUnit(unit_id="u4", name="Pantry Window", width_mm=900, height_mm=900, quantity=1,
                   system_id="sys-missing", glass_type_id="float-4mm", opening_type="fixed"),
    ]
