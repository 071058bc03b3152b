"""
FIDL Frontend Command-Line Interface
====================================

This package provides the command-line tool for the FIDL frontend:

- **fidlparse**: Parse .fidl files and report syntax errors

The tool is a Click-based CLI application.
"""

__all__ = ["fidlparse"]
