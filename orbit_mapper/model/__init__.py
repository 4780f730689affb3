"""
Orbit Model Package
===================

Data types, display convention, Kepler mechanics, element extraction, and
orbit polyline sampling.
"""
