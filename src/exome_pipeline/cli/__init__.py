"""Command-line interface for exome-pipeline."""
