"""Variant filtering and mouse-phenotype driven gene prioritization."""

__version__ = "0.1.0"
