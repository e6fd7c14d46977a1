"""
Command-line interface for the cbtail package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
