"""
Tabular report generation engine.

Turns raw data collections into column-aligned report tables and renders
them to spreadsheet artifacts.
"""

__version__ = "1.0.0"
