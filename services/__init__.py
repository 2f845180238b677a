"""
services - Barcode encoding and rendering, independent of Flask.
"""

from services.barcode_service import generate, GeneratedBarcode      # noqa: F401
from services.encoders import select_encoder, SymbologyKind           # noqa: F401
