"""
Claude 匯出 payload：不含圖片的畫面清單，加上對應到 Tailwind 的設計 token
"""

from typing import Callable, Optional

from .documentation import format_number
from .models import ExtractionSession
from .tailwind import (
    find_closest_tailwind_color,
    map_to_tailwind_font_size,
    map_to_tailwind_spacing,
)

PROMPT_TEMPLATE = (
    "Please create React components using Tailwind CSS based on these Figma designs.\n"
    "The design shows {count} screens/components that should be implemented.\n"
    "Follow the design system specifications provided for colors, typography, and spacing.\n"
    "Use the closest Tailwind CSS classes for all styling."
)


def build_prompt_instructions(screen_count: int) -> str:
    return PROMPT_TEMPLATE.format(count=screen_count)


def export_for_claude(
    session: ExtractionSession,
    color_mapper: Optional[Callable[[str], str]] = None,
) -> dict:
    """將 session 轉成交給 Claude 的 payload.

    圖片不放進 payload，另以檔案輸出（見 ``design_assets.write_export_bundle``）。
    """
    color_mapper = color_mapper or find_closest_tailwind_color
    styles = session.styles

    return {
        "designMetadata": session.metadata.to_dict(),
        "screens": [
            {
                "name": screen.name,
                "description": screen.description or "",
                "dimensions": f"{format_number(screen.width)} x {format_number(screen.height)}",
            }
            for screen in session.screens
        ],
        "designSystem": {
            "colors": [
                {
                    "name": color.name,
                    "value": color.hex,
                    "tailwindEquivalent": color_mapper(color.hex),
                }
                for color in styles.colors
            ],
            "typography": [
                {
                    "name": font.name,
                    "family": font.font_family,
                    "size": font.font_size,
                    "tailwindFontSize": map_to_tailwind_font_size(font.font_size),
                }
                for font in styles.typography
            ],
            "spacing": [
                {"value": value, "tailwindSpacing": map_to_tailwind_spacing(value)}
                for value in styles.spacing
            ],
        },
        "promptInstructions": build_prompt_instructions(len(session.screens)),
    }
