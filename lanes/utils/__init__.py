"""
Utility functions for the lanes command line.
"""

from .completion import generate_completion, SHELLS

__all__ = [
    'generate_completion',
    'SHELLS',
]
