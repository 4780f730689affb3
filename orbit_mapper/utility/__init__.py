"""
Utility Package
===============

TLE and time helpers, console printer, and terminal logger.
"""
