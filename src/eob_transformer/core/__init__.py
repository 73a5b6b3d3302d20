"""Core enums, coding constants and settings."""
