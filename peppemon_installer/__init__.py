"""Peppemon installer — build and install peppemon on a Linux host."""

__version__ = "0.1.0"
