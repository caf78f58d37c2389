#!/usr/bin/env python3
"""
Notekeeper CLI entry point.

Usage:
    python cli.py --help
    python cli.py server start --reload     # Start the API server
    python cli.py notes list                # Active notes, newest first
    python cli.py notes list --archived -c Work
    python cli.py notes add -t "Groceries" -b "Milk, eggs"
    python cli.py notes tag 3 -c 1 -c 2     # Note 3 gets exactly categories 1 and 2
    python cli.py categories seed           # Create the default categories
    python cli.py health status             # Backend health (requires server)
    python cli.py shell                     # Interactive shell
"""

import sys
from pathlib import Path

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from notekeeper.cli.main import app

if __name__ == "__main__":
    app()
