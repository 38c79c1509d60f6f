"""Pytest configuration for tsgen test suite."""

import sys
from pathlib import Path

# Add repository root to path for tsgen imports
sys.path.insert(0, str(Path(__file__).parent.parent))
