"""Pytest configuration to ensure the hexdumper package is importable."""
from __future__ import annotations

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parents[1] / "src"
_src_str = str(_SRC)
if _SRC.exists() and _src_str not in sys.path:
    sys.path.insert(0, _src_str)
