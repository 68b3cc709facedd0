"""Data models for FocusFlow CLI."""
