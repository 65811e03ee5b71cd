"""Command-line interface for previewctl."""
