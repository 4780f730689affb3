"""
Validation Package
==================

Test suite for the orbit mapper.

Modules:
--------
- test_kepler               : Tests for Kepler's equation and anomaly conversions
- test_display              : Tests for the display unit scale and axis remap
- test_orbit_sampler        : Tests for orbit polyline sampling
- test_orbit_converter      : Tests for state vector to orbital element extraction
- test_tle_helper           : Tests for TLE checksums, epochs, and synthetic TLEs
- test_time_helper          : Tests for time parsing and formatting
- test_propagator           : Tests for the analytic Kepler propagator
- test_sgp4_propagator      : Tests for the SGP4 wrapper
- test_ephemeris_propagator : Tests for ephemeris interpolation and SGP4 fallback
- test_configuration        : Tests for scenario configuration and loading
- test_main                 : End-to-end run of the demo scenario

Usage:
------
Run all tests:
  python -m pytest orbit_mapper/validation/ -v

Run a specific test module:
  python -m pytest orbit_mapper/validation/test_kepler.py -v

Run a specific test class:
  python -m pytest orbit_mapper/validation/test_kepler.py::TestSolveKepler -v
"""
