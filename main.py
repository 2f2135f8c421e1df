#!/usr/bin/env python3
"""
romdb - N64 ROM metadata lookup.

Usage:
    CLI Mode: python main.py --db mupen64plus.ini <rom or folder>...
    Web Mode: python main.py --web --db mupen64plus.ini [--host H] [--port P]

For CLI help: python main.py --help
"""

import sys
import os

# Add package to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from romdb.__main__ import main


if __name__ == '__main__':
    main()
