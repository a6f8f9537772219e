"""Wage Levels - prevailing wage tier and take-home pay estimates."""

__version__ = "0.1.0"
