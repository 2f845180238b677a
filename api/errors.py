"""
api.errors - Error handlers for the barcode blueprint.

Bad query parameters come back as an SVG so an embedding spreadsheet
cell still shows an image.
"""

import logging

from api import api_bp
from api.routes_barcode import BarcodeRequestError, svg_response
from services.barcode_service import render_error_svg

logger = logging.getLogger(__name__)


@api_bp.app_errorhandler(BarcodeRequestError)
def barcode_bad_request(e):
    logger.info(f"Rejected barcode request: {e}")
    return svg_response(render_error_svg(str(e)), 400)
