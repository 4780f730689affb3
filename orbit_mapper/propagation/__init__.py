"""
Orbit Propagation Package
=========================

Propagators that place a satellite at an absolute time: analytic Kepler,
SGP4 from a TLE, and ephemeris interpolation with synthetic-TLE fallback.
"""

from .propagator           import Propagator, KeplerPropagator
from .sgp4_propagator      import Sgp4Propagator
from .ephemeris_propagator import EphemerisPropagator

__all__ = ['Propagator', 'KeplerPropagator', 'Sgp4Propagator', 'EphemerisPropagator']
