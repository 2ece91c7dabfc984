"""
Pytest configuration.

Puts src/ on the path so the package imports without being installed.
"""

import sys
from pathlib import Path

src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))
