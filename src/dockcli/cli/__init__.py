"""
Command-line interface for the dockcli package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
