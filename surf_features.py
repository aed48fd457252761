#!/usr/bin/env python3
"""
Wrapper script for pure SURF feature detection.
Makes it easier to run without the -m flag.

Usage:
    python surf_features.py image.png -o features.npz
"""

import sys
from pure_surf.surf_cli import main

if __name__ == '__main__':
    sys.exit(main())
