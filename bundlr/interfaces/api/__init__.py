"""API interface package."""
