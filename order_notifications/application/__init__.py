"""Application layer: the send-once dispatch use-case."""

from .dispatch import dispatch_order_confirmation

__all__ = ["dispatch_order_confirmation"]
