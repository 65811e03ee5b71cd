"""Pydantic models for previewctl configuration, events and results."""
