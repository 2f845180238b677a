"""
Barcode API - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR       = Path(__file__).resolve().parent
TEMPLATES_DIR  = BASE_DIR / "templates"

# ── Server ─────────────────────────────────────────────────────────────
HOST      = os.environ.get("BARCODE_HOST", "0.0.0.0")
PORT      = int(os.environ.get("BARCODE_PORT", "5000"))
DEBUG     = os.environ.get("BARCODE_DEBUG", "0") == "1"
LOG_LEVEL = os.environ.get("BARCODE_LOG_LEVEL", "INFO").upper()

# Spreadsheets and web pages embed the image cross-origin
CORS_ORIGIN = os.environ.get("BARCODE_CORS_ORIGIN", "*")

# ── Request defaults ───────────────────────────────────────────────────
DEFAULT_FORMAT    = "CODE128"
DEFAULT_BAR_WIDTH = 2
DEFAULT_HEIGHT    = 100

# ── Request limits ─────────────────────────────────────────────────────
MAX_HEIGHT = int(os.environ.get("BARCODE_MAX_HEIGHT", "1000"))
