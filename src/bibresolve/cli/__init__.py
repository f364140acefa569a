"""Command-line interface for bibresolve."""
