"""Diagnostics package.

- compare_fast: Grena3/PSA against SPA over a date range (needs numpy, matplotlib)
- validate_skyfield: SPA against a JPL ephemeris via skyfield (needs the ephemeris extra)
"""

__all__ = ["compare_fast", "validate_skyfield"]
