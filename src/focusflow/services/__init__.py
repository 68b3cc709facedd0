"""Service layer for FocusFlow CLI."""
