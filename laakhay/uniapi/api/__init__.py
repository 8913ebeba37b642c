"""High-level service API."""

from .service import SUPPORTED_METHODS, Service, call

__all__ = ["SUPPORTED_METHODS", "Service", "call"]
