"""
Tailwind 對照 — 將設計數值對應到最接近的 utility class

顏色對照尚未實作（固定回傳 placeholder）；字級與間距為門檻查表。
"""

TAILWIND_COLOR_PLACEHOLDER = "tailwind-color-placeholder"

# (上限 px, class)，由小到大，第一個符合者勝出
FONT_SIZE_SCALE = (
    (12, "text-xs"),
    (14, "text-sm"),
    (16, "text-base"),
    (18, "text-lg"),
    (20, "text-xl"),
    (24, "text-2xl"),
    (30, "text-3xl"),
    (36, "text-4xl"),
    (48, "text-5xl"),
)
FONT_SIZE_FALLBACK = "text-6xl"

# (上限 rem, spacing key)
SPACING_SCALE = (
    (0.25, "0.5"),
    (0.5, "1"),
    (0.75, "1.5"),
    (1, "2"),
    (1.5, "3"),
    (2, "4"),
    (2.5, "5"),
    (3, "6"),
    (3.5, "7"),
    (4, "8"),
    (5, "10"),
    (6, "12"),
    (8, "16"),
    (10, "20"),
    (12, "24"),
    (14, "28"),
    (16, "32"),
)
SPACING_FALLBACK = "custom"

BASE_FONT_SIZE_PX = 16


def find_closest_tailwind_color(hex_color: str) -> str:
    """找出最接近的 Tailwind 色票 class.

    尚未實作：一律回傳 placeholder。需要真正的對照時，
    改傳 ``export_for_claude(color_mapper=...)``，不要修改這裡。
    """
    return TAILWIND_COLOR_PLACEHOLDER


def map_to_tailwind_font_size(font_size: float) -> str:
    for ceiling, class_name in FONT_SIZE_SCALE:
        if font_size <= ceiling:
            return class_name
    return FONT_SIZE_FALLBACK


def map_to_tailwind_spacing(space: float) -> str:
    rem = space / BASE_FONT_SIZE_PX
    for ceiling, key in SPACING_SCALE:
        if rem <= ceiling:
            return f"p-{key} or m-{key}"
    return SPACING_FALLBACK
