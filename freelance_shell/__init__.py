"""Module registry and navigation authorization for the freelance manager shell."""

__version__ = "0.1.0"
