"""Command-line interface for batch conversion of storage documents."""
