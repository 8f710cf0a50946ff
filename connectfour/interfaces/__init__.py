"""
connectfour.interfaces - User interfaces for Connect Four

This package contains the interaction controller shared by every front-end,
plus the terminal and pygame front-ends themselves.
"""

# Front-ends are not imported here so that the terminal interface works
# without pygame installed
__all__ = []
