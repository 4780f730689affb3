"""
Input Package
=============

Command-line parsing, scenario configuration, and satellite loading.
"""
