"""Ordered todo list with debounced persistence, cross-view sync and drag reordering."""

__version__ = "0.1.0"
