# sitefix/crawler/__init__.py
"""Breadth-first crawler: URL normalization, robots.txt, fetching, frontier."""
