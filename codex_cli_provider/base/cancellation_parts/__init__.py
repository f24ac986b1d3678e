"""Cancellation primitives, one class per module."""
