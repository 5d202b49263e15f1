# This project was developed with assistance from AI tools.
"""Barangay document request processing service."""

__version__ = "0.1.0"
