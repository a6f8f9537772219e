"""Wage Levels command-line interface."""
