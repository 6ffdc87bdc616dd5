"""
Host 介面 — 設計文件（Figma）對外協作者的最小模型

核心邏輯只透過 DocumentHost 讀取 selection、樣式與圖片匯出；
SnapshotHost 為純記憶體實作，測試與離線快照都用它。
"""

import base64
from dataclasses import dataclass, field
from typing import Iterable, Optional


# 可匯出成 Screen 的節點類型
EXPORTABLE_TYPES = ("FRAME", "COMPONENT", "INSTANCE")


class HostExportError(RuntimeError):
    """節點無法點陣化匯出."""


@dataclass
class SceneNode:
    """設計文件中的單一節點（座標相對於父節點）."""
    id: str
    name: str
    type: str
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    # None 表示此類型節點沒有 children 屬性（如 RECTANGLE、TEXT）
    children: Optional[list] = None
    layout_mode: Optional[str] = None
    padding_left: Optional[float] = None
    padding_right: Optional[float] = None
    padding_top: Optional[float] = None
    padding_bottom: Optional[float] = None
    plugin_data: dict = field(default_factory=dict)

    @property
    def has_children(self) -> bool:
        return self.children is not None


@dataclass
class Paint:
    type: str
    # 0-1 浮點數 (r, g, b)
    color: tuple = (0.0, 0.0, 0.0)
    opacity: Optional[float] = None


@dataclass
class PaintStyle:
    id: str
    name: str
    paints: list = field(default_factory=list)
    description: str = ""


@dataclass
class LineHeight:
    unit: str  # "PIXELS" | "PERCENT" | "AUTO"
    value: Optional[float] = None


@dataclass
class LetterSpacing:
    unit: str  # "PIXELS" | "PERCENT"
    value: float = 0


@dataclass
class TextStyle:
    id: str
    name: str
    font_family: str
    font_style: str
    font_size: float
    line_height: Optional[LineHeight] = None
    letter_spacing: Optional[LetterSpacing] = None
    description: str = ""


class DocumentHost:
    """設計工具提供給外掛核心的能力；子類別實作實際來源."""

    def document_name(self) -> str:
        raise NotImplementedError

    def current_user_name(self) -> Optional[str]:
        raise NotImplementedError

    def selection(self) -> list:
        raise NotImplementedError

    def local_paint_styles(self) -> list:
        raise NotImplementedError

    def local_text_styles(self) -> list:
        raise NotImplementedError

    async def export_async(self, node: SceneNode, format: str = "PNG", scale: float = 2) -> bytes:
        raise NotImplementedError

    def has_extension(self, name: str) -> bool:
        return False

    def close(self) -> None:
        pass

    def get_plugin_data(self, node: SceneNode, key: str) -> str:
        return node.plugin_data.get(key, "")

    def base64_encode(self, data: bytes) -> str:
        return base64.b64encode(data).decode("ascii")


class SnapshotHost(DocumentHost):
    """記憶體內的 host：selection / styles / 圖片皆由建構參數提供."""

    def __init__(
        self,
        document_name: str = "Untitled",
        user_name: Optional[str] = None,
        selection: Optional[list] = None,
        paint_styles: Optional[list] = None,
        text_styles: Optional[list] = None,
        images: Optional[dict] = None,
        extensions: Iterable[str] = (),
    ):
        self._document_name = document_name
        self._user_name = user_name
        self._selection = list(selection or [])
        self._paint_styles = list(paint_styles or [])
        self._text_styles = list(text_styles or [])
        self.images: dict[str, bytes] = dict(images or {})
        self.extensions = set(extensions)
        self.closed = False

    def document_name(self) -> str:
        return self._document_name

    def current_user_name(self) -> Optional[str]:
        return self._user_name

    def selection(self) -> list:
        return list(self._selection)

    def local_paint_styles(self) -> list:
        return list(self._paint_styles)

    def local_text_styles(self) -> list:
        return list(self._text_styles)

    async def export_async(self, node: SceneNode, format: str = "PNG", scale: float = 2) -> bytes:
        data = self.images.get(node.id)
        if data is None:
            raise HostExportError(f"No {format} render available for node {node.id} ({node.name})")
        return data

    def has_extension(self, name: str) -> bool:
        return name in self.extensions

    def close(self) -> None:
        self.closed = True
