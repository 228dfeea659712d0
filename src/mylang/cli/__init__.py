"""
mylang Command-Line Interface
=============================

This package provides the command-line driver for the mylang front end:

- **mylangc**: scan, parse and check one source file

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

from mylang.cli import mylangc

__all__ = ["mylangc"]
