"""
Main entry point for running the package as a module.

Usage:
    python -m upload_api serve
    python -m upload_api inspect photo.jpg
    python -m upload_api process photo.jpg --type portfolio
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
