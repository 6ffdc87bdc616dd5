"""
樣式擷取 — 全域顏色 / 文字樣式，以及由 selection 推估的間距系統
"""

import math
from typing import Callable, Optional

from .host import DocumentHost, LetterSpacing, LineHeight
from .models import RGBA, ColorStyle, DesignStyles, ExtractionSession, TypographyStyle


def round_half_up(value: float) -> int:
    """四捨五入（.5 一律進位），與設計工具的顯示一致."""
    return int(math.floor(value + 0.5))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02X}{g:02X}{b:02X}"


def resolve_line_height(line_height: Optional[LineHeight], font_size: float) -> Optional[float]:
    # 沒有數值的 PIXELS / PERCENT 視同 AUTO
    if line_height is None or line_height.unit == "AUTO" or line_height.value is None:
        return None
    if line_height.unit == "PIXELS":
        return line_height.value
    if line_height.unit == "PERCENT":
        return line_height.value * font_size / 100
    return None


def resolve_letter_spacing(letter_spacing: Optional[LetterSpacing]) -> Optional[float]:
    # 百分比需要字型度量才能換算，直接放棄
    if letter_spacing is None or letter_spacing.unit == "PERCENT":
        return None
    return letter_spacing.value


def extract_color_styles(host: DocumentHost) -> list:
    colors = []
    for style in host.local_paint_styles():
        paint = style.paints[0] if style.paints else None
        if paint is None or paint.type != "SOLID":
            continue
        r, g, b = (round_half_up(channel * 255) for channel in paint.color[:3])
        alpha = paint.opacity if paint.opacity is not None else 1
        colors.append(ColorStyle(
            name=style.name,
            id=style.id,
            rgb=RGBA(r=r, g=g, b=b, a=alpha),
            hex=rgb_to_hex(r, g, b),
            description=style.description or "",
        ))
    return colors


def extract_text_styles(host: DocumentHost) -> list:
    typography = []
    for style in host.local_text_styles():
        typography.append(TypographyStyle(
            name=style.name,
            id=style.id,
            font_family=style.font_family,
            font_style=style.font_style,
            font_size=style.font_size,
            line_height=resolve_line_height(style.line_height, style.font_size),
            letter_spacing=resolve_letter_spacing(style.letter_spacing),
            description=style.description or "",
        ))
    return typography


def extract_spacing_from_selection(selection: list) -> list:
    """收集相鄰子節點間的正間距，加上 auto-layout 的 padding."""
    spacing = set()
    for node in selection:
        if not node.has_children:
            continue
        children = node.children
        for current, nxt in zip(children, children[1:]):
            horizontal_gap = nxt.x - (current.x + current.width)
            if horizontal_gap > 0:
                spacing.add(round_half_up(horizontal_gap))
            vertical_gap = nxt.y - (current.y + current.height)
            if vertical_gap > 0:
                spacing.add(round_half_up(vertical_gap))

        if node.type == "FRAME" and node.layout_mode not in (None, "NONE"):
            for padding in (node.padding_left, node.padding_right, node.padding_top, node.padding_bottom):
                if padding is not None:
                    spacing.add(round_half_up(padding))

    return sorted(v for v in spacing if v > 0)


async def extract_design_styles(
    session: ExtractionSession,
    host: DocumentHost,
    post_message: Callable[[dict], None],
) -> None:
    post_message({"type": "styles-extraction-started"})
    session.styles = DesignStyles(
        colors=extract_color_styles(host),
        typography=extract_text_styles(host),
        spacing=extract_spacing_from_selection(host.selection()),
    )
    post_message({
        "type": "styles-extraction-completed",
        "data": session.styles.to_dict(),
    })
