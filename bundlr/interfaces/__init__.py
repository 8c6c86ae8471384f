"""Interfaces package - FastAPI web endpoints and argparse CLI."""
