"""
services.barcode_service - Barcode layout and SVG generation.

Takes a bit pattern from services.encoders, fits it into a fixed-width
canvas and emits a standalone SVG document.  generate() is the single
entry point used by the HTTP layer.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import List, NamedTuple, Union

from services.encoders import select_encoder

logger = logging.getLogger(__name__)

Number = Union[int, float]

CONTENT_TYPE = "image/svg+xml"

# Canvas geometry (SVG user units)
TARGET_WIDTH = 450
MIN_PADDING = 20
BAR_TOP = 10
VERTICAL_MARGIN = 20
LABEL_HEIGHT = 25
LABEL_OFFSET = 22
LABEL_FONT_SIZE = 16

ERROR_WIDTH = 450
ERROR_HEIGHT = 100

# Characters XML 1.0 does not allow in a document, even escaped
_XML_ILLEGAL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class BarcodeRenderError(Exception):
    """Encoding, layout or SVG emission failed."""


class LayoutError(BarcodeRenderError):
    """Pattern or dimensions cannot be laid out."""


@dataclass(frozen=True)
class Layout:
    module_width: int
    total_bars: int
    canvas_width: Number
    canvas_height: int
    horizontal_padding: Number
    barcode_height: int
    label_height: int


class GeneratedBarcode(NamedTuple):
    document: str
    content_type: str
    status_code: int


def _is_positive_int(n) -> bool:
    return isinstance(n, int) and not isinstance(n, bool) and n > 0


def _fmt(n: Number) -> str:
    """Render a coordinate without a trailing '.0'."""
    if isinstance(n, float) and n.is_integer():
        n = int(n)
    return str(n)


def escape_xml(text: str) -> str:
    """
    Drop characters XML cannot carry, then escape the five XML special
    characters ('&' first).
    """
    return (_XML_ILLEGAL.sub("", text)
                .replace("&", "&amp;")
                .replace("<", "&lt;")
                .replace(">", "&gt;")
                .replace('"', "&quot;")
                .replace("'", "&apos;"))


def compute_layout(pattern: str, bar_width: int, barcode_height: int,
                   display_value: bool) -> Layout:
    """
    Fit *pattern* into the TARGET_WIDTH canvas.

    Module width is always derived from the pattern length so barcodes
    keep a similar overall size; *bar_width* is validated but does not
    change the result.

    Raises:
        LayoutError: empty pattern or non-positive dimensions.
    """
    if not pattern:
        raise LayoutError("Cannot lay out an empty bit pattern")
    if not _is_positive_int(barcode_height):
        raise LayoutError(f"Barcode height must be a positive integer, got {barcode_height!r}")
    if not _is_positive_int(bar_width):
        raise LayoutError(f"Bar width must be a positive integer, got {bar_width!r}")

    total_bars = len(pattern)
    module_width = max(1, TARGET_WIDTH // total_bars)
    actual_width = total_bars * module_width
    padding = max(MIN_PADDING, (TARGET_WIDTH - actual_width) / 2)
    label_height = LABEL_HEIGHT if display_value else 0

    return Layout(
        module_width=module_width,
        total_bars=total_bars,
        canvas_width=actual_width + 2 * padding,
        canvas_height=barcode_height + label_height + VERTICAL_MARGIN,
        horizontal_padding=padding,
        barcode_height=barcode_height,
        label_height=label_height,
    )


def _svg_open(width: Number, height: Number) -> List[str]:
    w, h = _fmt(width), _fmt(height)
    return [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" '
        f'viewBox="0 0 {w} {h}">',
        f'<rect x="0" y="0" width="{w}" height="{h}" fill="#ffffff"/>',
    ]


def render_svg(pattern: str, layout: Layout, value: str,
               display_value: bool) -> str:
    """
    Emit the barcode SVG: white background, one black rect per '1'
    module and, optionally, the escaped value centred underneath.
    """
    lines = _svg_open(layout.canvas_width, layout.canvas_height)

    mw = layout.module_width
    for i, bit in enumerate(pattern):
        if bit != "1":
            continue
        x = layout.horizontal_padding + i * mw
        lines.append(f'<rect x="{_fmt(x)}" y="{BAR_TOP}" width="{mw}" '
                     f'height="{layout.barcode_height}" fill="#000000"/>')

    if display_value:
        cx = _fmt(layout.canvas_width / 2)
        y = layout.barcode_height + LABEL_OFFSET
        lines.append(f'<text x="{cx}" y="{y}" text-anchor="middle" '
                     f'font-family="monospace" font-size="{LABEL_FONT_SIZE}" '
                     f'fill="#000000">{escape_xml(value)}</text>')

    lines.append("</svg>")
    return "\n".join(lines)


def render_error_svg(message: str) -> str:
    """Fixed-size SVG carrying an error message in red."""
    lines = _svg_open(ERROR_WIDTH, ERROR_HEIGHT)
    lines.append(f'<text x="{ERROR_WIDTH // 2}" y="{ERROR_HEIGHT // 2}" '
                 f'text-anchor="middle" dominant-baseline="middle" '
                 f'font-family="Arial, sans-serif" font-size="14" '
                 f'fill="#ff0000">Error: {escape_xml(message)}</text>')
    lines.append("</svg>")
    return "\n".join(lines)


def generate(value: str, format_name: str = "CODE128", bar_width: int = 2,
             height: int = 100, display_value: bool = True) -> GeneratedBarcode:
    """
    Encode *value* and render it as SVG.

    Never raises: any failure is logged and returned as an error SVG
    with status 400.
    """
    try:
        encoder = select_encoder(format_name)
        pattern = encoder.encode(value)
        layout = compute_layout(pattern, bar_width, height, display_value)
        document = render_svg(pattern, layout, value, display_value)
    except Exception as e:
        logger.warning(f"Barcode generation failed for {value!r} ({format_name}): {e}")
        return GeneratedBarcode(render_error_svg(str(e)), CONTENT_TYPE, 400)

    logger.debug(f"Generated {encoder.kind.value} barcode: {layout.total_bars} modules, "
                 f"module width {layout.module_width}")
    return GeneratedBarcode(document, CONTENT_TYPE, 200)
