#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four game

Examples:
    python run.py play                  # play in the terminal
    python run.py play --ui pygame      # play in a window
    python run.py play --no-animation
    python run.py show 4,4,3,5,2
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connectfour.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
