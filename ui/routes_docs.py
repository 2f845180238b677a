"""
ui.routes_docs - Landing page.

"/" doubles as the barcode endpoint: with a ?value= parameter it
returns the SVG, otherwise the usage documentation.
"""

from flask import render_template, request

from ui import ui_bp
from api.routes_barcode import barcode_response
from services.encoders import supported_formats
import config


@ui_bp.route("/")
def index():
    if "value" in request.args:
        return barcode_response()

    origin = request.host_url.rstrip("/")
    return render_template(
        "index.html",
        origin=origin,
        formats=supported_formats(),
        default_format=config.DEFAULT_FORMAT,
        default_width=config.DEFAULT_BAR_WIDTH,
        default_height=config.DEFAULT_HEIGHT,
    )
