"""Session 儲存區與擷取出的資料紀錄（to_dict 輸出 camelCase 格式）."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


@dataclass
class ComponentStructure:
    name: str
    type: str
    id: str
    children: Optional[List["ComponentStructure"]] = None

    def to_dict(self) -> dict:
        data = {"name": self.name, "type": self.type, "id": self.id}
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass
class Screen:
    id: str
    name: str
    type: str
    width: float
    height: float
    image: str
    description: str = ""
    css_code: Optional[str] = None
    react_code: Optional[str] = None
    tailwind_code: Optional[str] = None
    component_structure: Optional[ComponentStructure] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "width": self.width,
            "height": self.height,
            "image": self.image,
            "description": self.description,
        }
        if self.css_code is not None:
            data["cssCode"] = self.css_code
        if self.react_code is not None:
            data["reactCode"] = self.react_code
        if self.tailwind_code is not None:
            data["tailwindCode"] = self.tailwind_code
        if self.component_structure is not None:
            data["componentStructure"] = self.component_structure.to_dict()
        return data


@dataclass
class RGBA:
    r: int
    g: int
    b: int
    a: float = 1

    def to_dict(self) -> dict:
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a}


@dataclass
class ColorStyle:
    name: str
    id: str
    rgb: RGBA
    hex: str
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "id": self.id,
            "rgb": self.rgb.to_dict(),
            "hex": self.hex,
            "description": self.description,
        }


@dataclass
class TypographyStyle:
    name: str
    id: str
    font_family: str
    font_style: str
    font_size: float
    line_height: Optional[float]
    letter_spacing: Optional[float]
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "id": self.id,
            "fontFamily": self.font_family,
            "fontStyle": self.font_style,
            "fontSize": self.font_size,
            "lineHeight": self.line_height,
            "letterSpacing": self.letter_spacing,
            "description": self.description,
        }


@dataclass
class DesignStyles:
    colors: List[ColorStyle] = field(default_factory=list)
    typography: List[TypographyStyle] = field(default_factory=list)
    spacing: List[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "colors": [c.to_dict() for c in self.colors],
            "typography": [t.to_dict() for t in self.typography],
            "spacing": list(self.spacing),
        }


@dataclass(frozen=True)
class SessionMetadata:
    project_name: str
    date: str
    author: str

    def to_dict(self) -> dict:
        return {"projectName": self.project_name, "date": self.date, "author": self.author}


@dataclass
class DevModeSupport:
    # componentLibraries / designTokens are reserved until the host API exists
    available: bool = False

    def to_dict(self) -> dict:
        return {"available": self.available}


@dataclass
class ExtractionSession:
    """一次外掛執行期間擷取的所有資料."""
    metadata: SessionMetadata
    screens: List[Screen] = field(default_factory=list)
    components: list = field(default_factory=list)
    styles: DesignStyles = field(default_factory=DesignStyles)
    dev_mode: Optional[DevModeSupport] = None

    @classmethod
    def start(cls, host) -> "ExtractionSession":
        """以 host 目前的文件開啟 session."""
        metadata = SessionMetadata(
            project_name=host.document_name(),
            date=datetime.now(timezone.utc).isoformat(),
            author=host.current_user_name() or "Unknown",
        )
        return cls(metadata=metadata)

    @property
    def dev_mode_available(self) -> bool:
        return bool(self.dev_mode and self.dev_mode.available)

    def to_dict(self) -> dict:
        data = {
            "screens": [s.to_dict() for s in self.screens],
            "components": list(self.components),
            "styles": self.styles.to_dict(),
            "metadata": self.metadata.to_dict(),
        }
        if self.dev_mode is not None:
            data["devModeData"] = self.dev_mode.to_dict()
        return data
