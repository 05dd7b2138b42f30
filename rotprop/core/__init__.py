"""Core base classes for rotprop."""

from rotprop.core.event import Event

__all__ = ["Event"]
