"""Sire - template-driven project scaffolder.

Materializes a project tree from a template directory and a YAML manifest.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
