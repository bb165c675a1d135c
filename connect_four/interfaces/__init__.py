"""
connect_four.interfaces - User interfaces for Connect Four

This package contains the front ends that drive the game engine.
"""

# Don't import anything here to avoid circular imports
__all__ = []
