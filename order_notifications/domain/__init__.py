"""Domain layer: order field resolution and confirmation email content."""

from .email import build_confirmation_message, render_items_html, render_total

__all__ = [
    "build_confirmation_message",
    "render_items_html",
    "render_total",
]
