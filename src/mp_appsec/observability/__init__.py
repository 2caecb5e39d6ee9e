"""Observability: logging and access audit."""
