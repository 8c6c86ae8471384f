"""Persistence layer - ArangoDB access only, no business logic."""
