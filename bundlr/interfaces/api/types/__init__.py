"""Pydantic request/response models for the API (thin adapters around DTOs)."""
