"""Core models, errors and settings."""
