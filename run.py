#!/usr/bin/env python3
"""
run.py - Main entry point for Drop Four

Examples:
    python run.py play
    python run.py check --position 0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,1,2,0,0,0
    python run.py replay --moves 0,1,0,1,0,1,0
    python run.py --debug replay --moves 2,2,2
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dropfour.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
