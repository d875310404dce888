"""Monitoring module for the node host."""

from core.monitoring.logs import configure_logging

__all__ = ["configure_logging"]
