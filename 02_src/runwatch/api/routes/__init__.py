"""API routers."""

from . import control, messages, providers

__all__ = ["control", "messages", "providers"]
