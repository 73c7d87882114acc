#!/usr/bin/env python3
"""
X12 Parser Command Line Tool

Usage:
    python main.py input.edi                    # Parse input.edi to input.json
    python main.py input.edi output.json        # Parse to specific output file
    python main.py input.edi - --strict-body    # Print JSON, keep full transaction set bodies
"""

import sys
from pathlib import Path

# Run from a source checkout without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from x12_cli import main  # noqa: E402


if __name__ == "__main__":
    sys.exit(main())
