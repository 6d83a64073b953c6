"""Shared CLI building blocks: context, options and error handling."""
