import re
import xml.etree.ElementTree as ET

import pytest

from services import barcode_service
from services.barcode_service import (
    CONTENT_TYPE, Layout, LayoutError, compute_layout, escape_xml, generate,
    render_error_svg, render_svg,
)
from services.encoders import Code128Encoder, Code39Encoder
from services.symbology import CODE39_SENTINEL, CODE39_TABLE


def _bar_rects(svg):
    """Black bar rects only (background is white)."""
    return re.findall(r'<rect x="([\d.]+)" y="10" width="(\d+)" height="(\d+)" fill="#000000"/>', svg)


def _text_nodes(svg):
    return re.findall(r"<text [^>]*>(.*?)</text>", svg)


# === Layout ===

def test_layout_fits_target_width():
    layout = compute_layout("10" * 50, 2, 100, True)
    assert layout == Layout(
        module_width=4,
        total_bars=100,
        canvas_width=450,
        canvas_height=145,
        horizontal_padding=25,
        barcode_height=100,
        label_height=25,
    )


def test_layout_half_unit_padding():
    layout = compute_layout("1" * 123, 2, 100, True)
    assert layout.module_width == 3
    assert layout.horizontal_padding == 40.5
    assert layout.canvas_width == 450


def test_layout_minimum_padding():
    layout = compute_layout("1" * 89, 2, 100, True)
    assert layout.module_width == 5
    assert layout.horizontal_padding == 20
    assert layout.canvas_width == 445 + 40


@pytest.mark.parametrize("total", [450, 451, 1000, 5000])
def test_layout_module_width_never_below_one(total):
    layout = compute_layout("1" * total, 2, 100, False)
    assert layout.module_width == 1
    assert layout.horizontal_padding == 20
    assert layout.canvas_width == total + 40


def test_layout_without_label():
    layout = compute_layout("1" * 24, 2, 100, False)
    assert layout.label_height == 0
    assert layout.canvas_height == 120


@pytest.mark.parametrize("bar_width", [1, 2, 7])
def test_layout_ignores_bar_width(bar_width):
    assert compute_layout("1" * 60, bar_width, 80, True) == \
        compute_layout("1" * 60, 2, 80, True)


def test_layout_is_deterministic():
    pattern = Code128Encoder().encode("deterministic")
    assert compute_layout(pattern, 2, 100, True) == compute_layout(pattern, 2, 100, True)


@pytest.mark.parametrize("pattern,bar_width,height", [
    ("", 2, 100),
    ("101", 2, 0),
    ("101", 2, -5),
    ("101", 0, 100),
    ("101", 2, True),
    ("101", 2, "100"),
])
def test_layout_rejects_bad_input(pattern, bar_width, height):
    with pytest.raises(LayoutError):
        compute_layout(pattern, bar_width, height, True)


# === Escaping ===

def test_escape_xml_all_specials():
    assert escape_xml("<a href=\"x\">'&'</a>") == \
        "&lt;a href=&quot;x&quot;&gt;&apos;&amp;&apos;&lt;/a&gt;"


def test_escape_xml_no_double_escape():
    assert escape_xml("<") == "&lt;"
    assert escape_xml("&lt;") == "&amp;lt;"
    assert escape_xml("plain 123") == "plain 123"


@pytest.mark.parametrize("text,expected", [
    ("A\x01B", "AB"),
    ("tab\x0bx", "tabx"),
    ("A\x00", "A"),
    ("\ufffeX\uffff", "X"),
    ("keep\ttab\nand\rcr", "keep\ttab\nand\rcr"),
])
def test_escape_xml_drops_illegal_characters(text, expected):
    assert escape_xml(text) == expected


# === Rendering ===

def test_render_one_rect_per_bar_module():
    pattern = "1101"
    layout = compute_layout(pattern, 2, 50, False)
    svg = render_svg(pattern, layout, "x", False)
    mw = layout.module_width
    xs = [float(x) for x, _, _ in _bar_rects(svg)]
    assert xs == [20 + 0 * mw, 20 + 1 * mw, 20 + 3 * mw]
    assert all(w == str(mw) and h == "50" for _, w, h in _bar_rects(svg))


def test_render_background_covers_canvas():
    pattern = Code128Encoder().encode("A")
    layout = compute_layout(pattern, 2, 100, True)
    svg = render_svg(pattern, layout, "A", True)
    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert '<svg xmlns="http://www.w3.org/2000/svg" width="460" height="145"' in svg
    assert '<rect x="0" y="0" width="460" height="145" fill="#ffffff"/>' in svg
    assert svg.rstrip().endswith("</svg>")


def test_render_label_position_and_escaping():
    value = "<b>&\"'"
    pattern = Code128Encoder().encode(value)
    layout = compute_layout(pattern, 2, 80, True)
    svg = render_svg(pattern, layout, value, True)
    assert _text_nodes(svg) == ["&lt;b&gt;&amp;&quot;&apos;"]
    assert "<b>" not in svg
    assert 'y="102"' in svg


def test_render_without_label():
    pattern = Code128Encoder().encode("A")
    layout = compute_layout(pattern, 2, 100, False)
    assert "<text" not in render_svg(pattern, layout, "A", False)


def test_render_is_byte_identical():
    pattern = Code39Encoder().encode("REPEAT-ME")
    layout = compute_layout(pattern, 2, 100, True)
    first = render_svg(pattern, layout, "REPEAT-ME", True)
    second = render_svg(pattern, layout, "REPEAT-ME", True)
    assert first.encode("utf-8") == second.encode("utf-8")


def test_render_error_svg():
    svg = render_error_svg("bad <input> & more")
    assert 'width="450" height="100"' in svg
    assert 'fill="#ff0000"' in svg
    assert "bad &lt;input&gt; &amp; more" in svg
    assert "<input>" not in svg


# === generate() end-to-end ===

def test_generate_code128_digits():
    result = generate("123456789", "CODE128", 2, 100, True)
    assert result.status_code == 200
    assert result.content_type == CONTENT_TYPE == "image/svg+xml"
    pattern = Code128Encoder().encode("123456789")
    assert len(pattern) == 123
    assert len(_bar_rects(result.document)) == pattern.count("1")
    assert all(w == "3" for _, w, _ in _bar_rects(result.document))
    assert _text_nodes(result.document) == ["123456789"]


def test_generate_code39_hello():
    result = generate("HELLO", "CODE39", 2, 100, True)
    assert result.status_code == 200
    pattern = Code39Encoder().encode("HELLO")
    assert pattern == (CODE39_SENTINEL
                       + "".join("0" + CODE39_TABLE[c] for c in "HELLO")
                       + CODE39_SENTINEL)
    assert len(pattern) == 89
    assert len(_bar_rects(result.document)) == pattern.count("1")


def test_generate_empty_value_without_label():
    result = generate("", "CODE128", 2, 100, False)
    assert result.status_code == 200
    assert "<text" not in result.document
    assert 'height="120"' in result.document


def test_generate_unknown_format_uses_code128():
    result = generate("x", "QRCODE", 2, 100, True)
    assert result.status_code == 200
    assert result.document == generate("x", "CODE128", 2, 100, True).document


def test_generate_layout_failure_returns_error_svg():
    result = generate("123", "CODE128", 2, 0, True)
    assert result.status_code == 400
    assert result.content_type == "image/svg+xml"
    assert 'fill="#ff0000"' in result.document
    assert "Barcode height must be a positive integer" in result.document


def test_generate_unexpected_failure_is_escaped(monkeypatch, caplog):
    def boom(*args, **kwargs):
        raise RuntimeError("<kaboom> & friends")

    monkeypatch.setattr(barcode_service, "render_svg", boom)
    with caplog.at_level("WARNING", logger="services.barcode_service"):
        result = generate("ABC", "CODE39", 2, 100, True)

    assert result.status_code == 400
    assert "&lt;kaboom&gt; &amp; friends" in result.document
    assert "<kaboom>" not in result.document
    assert "Barcode generation failed" in caplog.text


def test_generate_non_string_value_is_error():
    result = generate(None, "CODE128", 2, 100, True)
    assert result.status_code == 400


SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.mark.parametrize("value", ["A\x01B", "tab\x0bx", "A\x00", "<&>\"'", "123456789"])
@pytest.mark.parametrize("format_name", ["CODE128", "CODE39"])
def test_generate_emits_well_formed_xml(value, format_name):
    result = generate(value, format_name, 2, 100, True)
    assert result.status_code == 200
    root = ET.fromstring(result.document)
    assert root.tag == SVG_NS + "svg"
    assert len(root.findall(SVG_NS + "text")) == 1


def test_control_character_still_encoded_as_fallback():
    """The label loses the control character; the bars keep its '0' fallback."""
    result = generate("A\x01B", "CODE128", 2, 100, True)
    label = ET.fromstring(result.document).find(SVG_NS + "text")
    assert label.text == "AB"
    bars = _bar_rects(result.document)
    assert bars == _bar_rects(generate("A0B", "CODE128", 2, 100, True).document)


def test_error_svg_is_well_formed():
    root = ET.fromstring(render_error_svg("bad \x01 <input> & more"))
    text = root.find(SVG_NS + "text")
    assert text.text == "Error: bad  <input> & more"


def test_generate_accepts_format_name_keyword():
    result = generate("HELLO", format_name="CODE39", bar_width=2, height=100,
                      display_value=False)
    assert result.status_code == 200
    assert result.document == generate("HELLO", "CODE39", 2, 100, False).document
