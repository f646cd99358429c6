"""
dropfour.interfaces - User interfaces for Drop Four

This package contains the command-line interface.
"""

# Don't import anything here to avoid circular imports
__all__ = []
