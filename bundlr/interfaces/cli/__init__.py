"""CLI interface package."""
