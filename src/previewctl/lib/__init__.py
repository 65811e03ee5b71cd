"""Shared utilities for previewctl: errors and logging."""
