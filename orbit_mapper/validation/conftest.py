"""
Pytest Configuration and Fixtures
=================================

Shared fixtures for all validation tests.
"""
import matplotlib
matplotlib.use('Agg')

import pytest
import numpy as np

from datetime import datetime, timezone
from pathlib  import Path

from orbit_mapper.model.constants import EARTH
from orbit_mapper.model.display   import DisplayConvention
from orbit_mapper.model.elements  import OrbitalElements


ISS_TLE_LINE_1 = "1 25544U 98067A   19343.69339541  .00001764  00000-0  38792-4 0  9991"
ISS_TLE_LINE_2 = "2 25544  51.6439 211.2001 0007417  17.6667  85.6398 15.50103472202482"


@pytest.fixture(scope="session")
def project_root():
  """Return the project root directory."""
  return Path(__file__).parent.parent.parent


@pytest.fixture(scope="session")
def demo_scenario_path(project_root):
  """Return path to the demo scenario."""
  return project_root / "data" / "scenarios" / "demo.yaml"


@pytest.fixture
def iss_tle():
  """ISS TLE from the sgp4 library documentation."""
  return ISS_TLE_LINE_1, ISS_TLE_LINE_2


@pytest.fixture
def iss_epoch():
  """Epoch of the ISS TLE (day 343.69339541 of 2019)."""
  return datetime(2019, 12, 9, 16, 38, 29, 363424, tzinfo=timezone.utc)


@pytest.fixture
def identity_convention():
  """Kilometers, no axis remap."""
  return DisplayConvention.identity()


@pytest.fixture
def leo_state():
  """Circular LEO at 6778 km, 51.6 deg inclination, as (pos [km], vel [km/s])."""
  pos_mag = 6778.0
  vel_mag = np.sqrt(EARTH.GP / pos_mag)
  inc     = np.radians(51.6)
  pos_vec = np.array([pos_mag, 0.0, 0.0])
  vel_vec = np.array([0.0, vel_mag * np.cos(inc), vel_mag * np.sin(inc)])
  return pos_vec, vel_vec


@pytest.fixture
def elliptical_elements():
  """Inclined elliptical orbit in Earth radii."""
  return OrbitalElements(
    semi_major_axis   = 2.0,
    eccentricity      = 0.3,
    inclination_deg   = 40.0,
    raan_deg          = 75.0,
    arg_periapsis_deg = 120.0,
    mean_anomaly_deg  = 10.0,
  )


@pytest.fixture
def epoch():
  """Common reference epoch."""
  return datetime(2025, 10, 1, 0, 0, 0, tzinfo=timezone.utc)
