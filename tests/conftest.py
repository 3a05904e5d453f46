"""Pytest configuration shared by unit and integration tests"""

import sys
from pathlib import Path

# Add src/ to path so tests run without an editable install
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))
