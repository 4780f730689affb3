"""
Plot Package
============

Static 3D figures of orbit polylines and marker tracks.
"""
