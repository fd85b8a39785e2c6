# sitefix/__init__.py
"""
SiteFix package initializer.
Breadth-first site crawler with page role classification and priority scoring.
The command line lives in :mod:`sitefix.cli`.
"""
__version__ = "0.1.0"
