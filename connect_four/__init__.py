"""
connect_four - Connect Four game engine

This package provides the board representation, turn management, gravity
drops and win detection for a two-player Connect Four game, together with a
Gymnasium environment and a terminal interface built on top of the engine.
"""

# Version number
__version__ = '0.1.0'
