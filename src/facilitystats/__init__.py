"""
facilitystats: cleaning and summary of detention facility data.

This package normalizes an irregular facility table (names, state codes,
population counts, inspection dates), derives facility sizes, and
produces descriptive aggregates and charts.
"""

from importlib.metadata import version

__version__ = version("facilitystats")

__all__ = ["__version__"]
