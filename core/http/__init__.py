"""HTTP request model and authenticated transport."""

from core.http.request import RequestSpec

__all__ = ["RequestSpec"]
