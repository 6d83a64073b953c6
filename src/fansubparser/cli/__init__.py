"""Command-line interface for fansubparser."""
