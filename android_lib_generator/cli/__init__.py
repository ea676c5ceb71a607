"""
CLI module for the Android library generator.

Provides the ``alib`` click group, installed as a console script.
"""

from .commands import main

__all__ = ["main"]
