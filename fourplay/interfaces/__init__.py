"""
fourplay.interfaces - User interfaces for fourplay

This package contains the adapters that turn user input into engine calls
and engine state into output.
"""

# Don't import anything here to avoid circular imports
__all__ = []
