"""
Orbit Mapper
============

Orbit polylines and live satellite positions from Keplerian elements, TLEs
(SGP4), and ephemeris samples.
"""
