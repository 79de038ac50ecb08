"""Logging setup and text display."""
