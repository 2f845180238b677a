"""
api.routes_barcode - /barcode SVG endpoint and format listing.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from flask import Response, jsonify, request

from api import api_bp
from services.barcode_service import CONTENT_TYPE, generate
from services.encoders import supported_formats
import config


class BarcodeRequestError(Exception):
    """Query parameters could not be turned into a barcode request."""


@dataclass
class BarcodeRequest:
    value: str
    format: str = config.DEFAULT_FORMAT
    bar_width: int = config.DEFAULT_BAR_WIDTH
    height: int = config.DEFAULT_HEIGHT
    display_value: bool = True

    @classmethod
    def from_args(cls, args) -> "BarcodeRequest":
        """Build a request from query args, applying defaults and limits."""
        if "value" not in args:
            raise BarcodeRequestError("Missing required parameter 'value'")

        return cls(
            value=args.get("value", ""),
            format=args.get("format") or config.DEFAULT_FORMAT,
            bar_width=_int_param(args, "width", config.DEFAULT_BAR_WIDTH),
            height=_int_param(args, "height", config.DEFAULT_HEIGHT,
                              config.MAX_HEIGHT),
            # Anything but the literal "false" shows the label
            display_value=args.get("displayValue") != "false",
        )


def _int_param(args, name: str, default: int,
               maximum: Optional[int] = None) -> int:
    raw = args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise BarcodeRequestError(f"Parameter '{name}' must be an integer, got {raw!r}")
    if value < 1:
        raise BarcodeRequestError(f"Parameter '{name}' must be a positive integer")
    if maximum is not None and value > maximum:
        raise BarcodeRequestError(f"Parameter '{name}' must be between 1 and {maximum}")
    return value


def svg_response(document: str, status: int,
                 mimetype: str = CONTENT_TYPE) -> Response:
    resp = Response(document, status=status, mimetype=mimetype)
    resp.headers["Access-Control-Allow-Origin"] = config.CORS_ORIGIN
    return resp


def barcode_response() -> Response:
    """Render the barcode described by the current request's query string."""
    req = BarcodeRequest.from_args(request.args)
    result = generate(req.value, req.format, req.bar_width, req.height,
                      req.display_value)
    return svg_response(result.document, result.status_code,
                        result.content_type)


@api_bp.route("/barcode")
def barcode():
    """
    GET /barcode?value=...&format=CODE128&width=2&height=100&displayValue=true
    """
    return barcode_response()


@api_bp.route("/formats")
def formats():
    return jsonify({"formats": supported_formats(),
                    "default": config.DEFAULT_FORMAT})
