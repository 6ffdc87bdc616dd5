"""
樣式擷取測試：顏色正規化、行高 / 字距換算、間距推估。
"""
import asyncio

import pytest
from figma_claude.host import (
    LetterSpacing,
    LineHeight,
    Paint,
    PaintStyle,
    SceneNode,
    SnapshotHost,
    TextStyle,
)
from figma_claude.models import ExtractionSession, DesignStyles
from figma_claude.style_extractor import (
    extract_color_styles,
    extract_design_styles,
    extract_spacing_from_selection,
    extract_text_styles,
    resolve_letter_spacing,
    resolve_line_height,
    rgb_to_hex,
)


def box(node_id, x, y, w, h):
    return SceneNode(id=node_id, name=node_id, type="RECTANGLE", x=x, y=y, width=w, height=h)


def frame(children, **kwargs):
    base = dict(id="1:1", name="Frame", type="FRAME", width=400, height=400, children=children)
    base.update(kwargs)
    return SceneNode(**base)


def text_style(**kwargs):
    base = dict(id="S:t", name="Body", font_family="Inter", font_style="Regular", font_size=16)
    base.update(kwargs)
    return TextStyle(**base)


# ─── 顏色 ─────────────────────────────────────────────────────────────────────

class TestColors:
    def test_pure_red(self):
        host = SnapshotHost(paint_styles=[
            PaintStyle(id="S:1", name="Red", paints=[Paint("SOLID", (1, 0, 0))]),
        ])
        [color] = extract_color_styles(host)
        assert color.hex == "#FF0000"
        assert (color.rgb.r, color.rgb.g, color.rgb.b, color.rgb.a) == (255, 0, 0, 1)
        assert color.description == ""

    def test_opacity_is_kept_out_of_hex(self):
        host = SnapshotHost(paint_styles=[
            PaintStyle(id="S:1", name="Ink 50", paints=[Paint("SOLID", (0, 0, 0), opacity=0.5)]),
        ])
        [color] = extract_color_styles(host)
        assert color.rgb.a == 0.5
        assert color.hex == "#000000"

    def test_half_channel_rounds_up(self):
        host = SnapshotHost(paint_styles=[
            PaintStyle(id="S:1", name="Gray", paints=[Paint("SOLID", (0.5, 0.5, 0.5))]),
        ])
        [color] = extract_color_styles(host)
        assert color.rgb.r == 128
        assert color.hex == "#808080"

    def test_non_solid_and_empty_styles_skipped(self):
        host = SnapshotHost(paint_styles=[
            PaintStyle(id="S:1", name="Gradient", paints=[Paint("GRADIENT_LINEAR")]),
            PaintStyle(id="S:2", name="Empty", paints=[]),
            PaintStyle(id="S:3", name="Blue", paints=[Paint("SOLID", (0, 0, 1))], description="Primary"),
        ])
        colors = extract_color_styles(host)
        assert [c.name for c in colors] == ["Blue"]
        assert colors[0].description == "Primary"

    def test_rgb_to_hex_uppercase(self):
        assert rgb_to_hex(171, 205, 239) == "#ABCDEF"
        assert rgb_to_hex(0, 10, 255) == "#000AFF"


# ─── 行高 / 字距 ──────────────────────────────────────────────────────────────

class TestTypography:
    def test_line_height_percent(self):
        assert resolve_line_height(LineHeight("PERCENT", 150), 16) == 24

    def test_line_height_pixels_pass_through(self):
        assert resolve_line_height(LineHeight("PIXELS", 22), 16) == 22

    def test_line_height_auto_is_none(self):
        assert resolve_line_height(LineHeight("AUTO", 140), 16) is None
        assert resolve_line_height(None, 16) is None

    @pytest.mark.parametrize("unit", ["PERCENT", "PIXELS"])
    def test_line_height_without_value_is_none(self, unit):
        assert resolve_line_height(LineHeight(unit), 16) is None

    def test_valueless_line_height_does_not_break_extraction(self):
        host = SnapshotHost(text_styles=[
            text_style(line_height=LineHeight("PERCENT")),
            text_style(id="S:u", name="Caption", line_height=LineHeight("PIXELS", 18), font_size=12),
        ])
        session = ExtractionSession.start(host)
        messages = []

        asyncio.run(extract_design_styles(session, host, messages.append))

        typography = messages[-1]["data"]["typography"]
        assert [t["lineHeight"] for t in typography] == [None, 18]

    def test_letter_spacing(self):
        assert resolve_letter_spacing(LetterSpacing("PIXELS", -0.5)) == -0.5
        assert resolve_letter_spacing(LetterSpacing("PERCENT", 2)) is None
        assert resolve_letter_spacing(None) is None

    def test_extract_text_styles(self):
        host = SnapshotHost(text_styles=[
            text_style(
                line_height=LineHeight("PERCENT", 125),
                letter_spacing=LetterSpacing("PERCENT", 1),
                font_size=32,
                font_style="Bold",
            ),
        ])
        [font] = extract_text_styles(host)
        assert font.line_height == 40
        assert font.letter_spacing is None
        assert font.font_style == "Bold"
        assert font.font_family == "Inter"


# ─── 間距推估 ─────────────────────────────────────────────────────────────────

class TestSpacing:
    def test_horizontal_and_vertical_gaps(self):
        node = frame([box("a", 0, 0, 100, 50), box("b", 116, 0, 100, 50), box("c", 116, 74, 100, 50)])
        # a→b：水平 16；b→c：垂直 24（水平為負，不記錄）
        assert extract_spacing_from_selection([node]) == [16, 24]

    def test_overlapping_children_record_nothing(self):
        node = frame([box("a", 0, 0, 100, 100), box("b", 50, 50, 100, 100), box("c", 150, 150, 10, 10)])
        assert extract_spacing_from_selection([node]) == []

    def test_gaps_are_rounded(self):
        node = frame([box("a", 0, 0, 10, 10), box("b", 17.5, 0, 10, 10)])
        assert extract_spacing_from_selection([node]) == [8]

    def test_auto_layout_padding_included(self):
        node = frame([], layout_mode="VERTICAL",
                     padding_left=24, padding_right=24, padding_top=12.4, padding_bottom=0)
        assert extract_spacing_from_selection([node]) == [12, 24]

    def test_padding_ignored_without_auto_layout(self):
        node = frame([], layout_mode="NONE", padding_left=24)
        assert extract_spacing_from_selection([node]) == []

    def test_padding_only_for_frames(self):
        node = frame([], type="COMPONENT", layout_mode="HORIZONTAL", padding_left=24)
        assert extract_spacing_from_selection([node]) == []

    def test_nodes_without_children_skipped(self):
        assert extract_spacing_from_selection([box("a", 0, 0, 10, 10)]) == []

    def test_dedup_and_ascending_across_nodes(self):
        first = frame([box("a", 0, 0, 10, 10), box("b", 42, 0, 10, 10)])
        second = frame([box("c", 0, 0, 10, 10), box("d", 18, 0, 10, 10), box("e", 60, 0, 10, 10)],
                       id="1:2", layout_mode="HORIZONTAL", padding_left=8, padding_top=32)
        result = extract_spacing_from_selection([first, second])
        assert result == [8, 32]
        assert result == sorted(set(result))


# ─── 完整流程 ─────────────────────────────────────────────────────────────────

def test_extract_design_styles_replaces_styles_and_posts():
    host = SnapshotHost(
        selection=[frame([box("a", 0, 0, 10, 10), box("b", 26, 0, 10, 10)])],
        paint_styles=[PaintStyle(id="S:1", name="Red", paints=[Paint("SOLID", (1, 0, 0))])],
        text_styles=[text_style(line_height=LineHeight("AUTO"))],
    )
    session = ExtractionSession.start(host)
    session.styles = DesignStyles(spacing=[999])
    messages = []

    asyncio.run(extract_design_styles(session, host, messages.append))

    assert [m["type"] for m in messages] == ["styles-extraction-started", "styles-extraction-completed"]
    data = messages[-1]["data"]
    assert data["spacing"] == [16]
    assert data["colors"][0]["hex"] == "#FF0000"
    assert data["typography"][0]["lineHeight"] is None
    assert session.styles.spacing == [16]
