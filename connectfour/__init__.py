"""
connectfour - Two-player Connect Four with animated piece drops

This package provides the board engine (grid, gravity, win and draw
detection, turn sequencing), an interaction controller that turns discrete
input events into moves, and terminal and pygame front-ends built on top of
the controller.
"""

# Version number
__version__ = '1.0.0'
