"""Observability: structured logging and Prometheus metrics.

Provides standardized logging primitives using structlog and the
tracker's metric definitions.
"""
