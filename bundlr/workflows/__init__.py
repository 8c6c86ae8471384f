"""
Workflows package.

Each workflow orchestrates persistence and components for one use case.
Workflows take their dependencies as parameters and hold no state between calls.
"""
