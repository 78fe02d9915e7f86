"""
xivdat Command-Line Interface
=============================

This package provides the `xivdat` command-line tool for inspecting and
editing binary DAT files. It is implemented as a Click-based CLI
application; every library error is reported on stderr with a non-zero
exit code.
"""

__all__ = ["xivdat"]
