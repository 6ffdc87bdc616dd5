"""
Markdown 設計文件產生器（只讀 session，不修改）
"""

import json
from datetime import datetime
from typing import Optional

from .models import ExtractionSession

DEV_MODE_NOTICE = "> This documentation was enhanced with Figma DevMode data"


def format_number(value) -> str:
    """16.0 → '16'，保留非整數的小數."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _fenced(lang: str, code: str) -> str:
    return f"```{lang}\n{code}\n```\n\n"


def generate_documentation(session: ExtractionSession, generated_at: Optional[datetime] = None) -> str:
    generated_at = generated_at or datetime.now()
    meta = session.metadata

    md = f"# {meta.project_name} - Design Documentation\n\n"
    md += f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}\n"
    md += f"Author: {meta.author}\n\n"

    if session.dev_mode_available:
        md += f"{DEV_MODE_NOTICE}\n\n"

    # ─── Screens ───
    md += "## Screens\n\n"
    for screen in session.screens:
        md += f"### {screen.name}\n\n"
        md += f"![{screen.name}]\n\n"
        if screen.description:
            md += f"{screen.description}\n\n"
        if screen.css_code:
            md += "#### CSS Code\n\n" + _fenced("css", screen.css_code)
        if screen.react_code:
            md += "#### React Component\n\n" + _fenced("jsx", screen.react_code)
        if screen.tailwind_code:
            md += "#### Tailwind HTML\n\n" + _fenced("html", screen.tailwind_code)

    # ─── Design System ───
    styles = session.styles
    md += "## Design System\n\n"

    md += "### Colors\n\n"
    for color in styles.colors:
        md += f"- **{color.name}**: {color.hex}\n"
    md += "\n"

    md += "### Typography\n\n"
    for font in styles.typography:
        md += f"- **{font.name}**: {font.font_family} {font.font_style}, {format_number(font.font_size)}px\n"
    md += "\n"

    md += "### Spacing\n\n"
    if styles.spacing:
        values = ", ".join(f"{value}px" for value in styles.spacing)
        md += f"Common spacing values: {values}\n\n"

    # ─── Component Structure ───
    structured = [s for s in session.screens if s.component_structure is not None]
    if structured:
        md += "## Component Structure\n\n"
        for screen in structured:
            md += f"### {screen.name} Structure\n\n"
            md += _fenced("json", json.dumps(screen.component_structure.to_dict(), indent=2, ensure_ascii=False))

    return md
