"""Core parsing functionality for fansubparser."""
