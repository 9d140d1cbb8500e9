#!/usr/bin/env python3
"""
run.py - Main entry point for fourplay

Usage:
    python run.py [--rows N] [--cols N] [--player1-color C] [--player2-color C]
                  [--player1-label L] [--player2-label L] [--locale en|fr]
                  [--debug | --debug-level LEVEL] [--log-file PATH]
"""

import os
import sys

# Add the project root to Python path so the package imports without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fourplay.interfaces.cli import main


if __name__ == "__main__":
    main(sys.argv[1:])
