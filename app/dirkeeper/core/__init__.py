"""Core run configuration, scheduling, and presentation support."""
