"""
Command Line Interface for the SGA optimizer.

This package provides CLI tools for running searches and inspecting chromosomes.
"""

from .run import run_command
from .decode import decode_command

__all__ = [
    'run_command',
    'decode_command'
]
