"""
espkit CLI module.

This module provides the command-line interface for espkit.
"""

from .parser import CLI, main

__all__ = ["CLI", "main"]
