"""
figma-claude — Figma 設計擷取 → 設計文件 / Claude 匯出

擷取選取的 frame 與全域樣式，產生 Markdown 文件，
並將數值對應到 Tailwind class 後輸出給 Claude。
"""

__version__ = "0.3.0"

from .host import (
    DocumentHost,
    SnapshotHost,
    SceneNode,
    Paint,
    PaintStyle,
    TextStyle,
    LineHeight,
    LetterSpacing,
    HostExportError,
)
from .models import (
    ExtractionSession,
    Screen,
    ColorStyle,
    TypographyStyle,
    ComponentStructure,
    DesignStyles,
)
from .frame_extractor import extract_selected_frames, is_dev_mode_available, initialize_dev_mode_support
from .style_extractor import extract_design_styles, extract_spacing_from_selection
from .documentation import generate_documentation
from .claude_export import export_for_claude
from .tailwind import find_closest_tailwind_color, map_to_tailwind_font_size, map_to_tailwind_spacing
from .codegen import CodegenPort, PlaceholderCodegen
from .plugin import PluginController, RequestKind
from .figma_reader import FigmaAPIClient, FigmaToScene, FigmaDocumentHost, build_host, fetch_snapshot
from .config import load_config, validate_config
from . import design_assets

__all__ = [
    "__version__",
    "DocumentHost",
    "SnapshotHost",
    "SceneNode",
    "Paint",
    "PaintStyle",
    "TextStyle",
    "LineHeight",
    "LetterSpacing",
    "HostExportError",
    "ExtractionSession",
    "Screen",
    "ColorStyle",
    "TypographyStyle",
    "ComponentStructure",
    "DesignStyles",
    "extract_selected_frames",
    "is_dev_mode_available",
    "initialize_dev_mode_support",
    "extract_design_styles",
    "extract_spacing_from_selection",
    "generate_documentation",
    "export_for_claude",
    "find_closest_tailwind_color",
    "map_to_tailwind_font_size",
    "map_to_tailwind_spacing",
    "CodegenPort",
    "PlaceholderCodegen",
    "PluginController",
    "RequestKind",
    "FigmaAPIClient",
    "FigmaToScene",
    "FigmaDocumentHost",
    "build_host",
    "fetch_snapshot",
    "load_config",
    "validate_config",
    "design_assets",
]
