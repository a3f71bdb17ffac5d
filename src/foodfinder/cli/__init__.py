"""Command-line interface for foodfinder."""
