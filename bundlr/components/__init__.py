"""Components package - pure computation, no I/O."""
