"""Hypothesis strategies shared across the test suite."""

from .messages import composites, identifiers, messages

__all__ = ["composites", "identifiers", "messages"]
