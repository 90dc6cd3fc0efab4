"""Core utilities shared across syntax, recognition and generation layers.

By isolating these utilities here, we maintain a clean dependency graph:

    core <- syntax <- messages <- recognition/generation <- transform

Exports:
    DepthGuard: Context manager for recursion depth limiting
    DepthLimitExceededError: Exception raised when depth limit exceeded
    IdentifierAllocator: Sequential fallback-id generator with rollback

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError
from .identifiers import Checkpoint, IdentifierAllocator

__all__ = ["Checkpoint", "DepthGuard", "DepthLimitExceededError", "IdentifierAllocator"]
