"""
Figma REST API 讀取 → DocumentHost

以 REST 檔案 JSON（線上抓取或離線快照）建立 host，
讓外掛核心在 Figma 之外也能跑同一套擷取流程。
"""

import asyncio
import json
from pathlib import Path
from typing import Iterable, Optional

import requests

from . import log
from .host import (
    EXPORTABLE_TYPES,
    HostExportError,
    LetterSpacing,
    LineHeight,
    Paint,
    PaintStyle,
    SceneNode,
    SnapshotHost,
    TextStyle,
)

PLUGIN_NAMESPACE = "figma-claude"


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str):
        self.token = token
        self.session = requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })

    def get_file(self, file_key: str, node_ids: Optional[list] = None) -> dict:
        url = f"{self.BASE_URL}/files/{file_key}"
        params = {}
        if node_ids:
            params["ids"] = ",".join(node_ids)
        resp = self.session.get(url, params=params)
        resp.raise_for_status()
        return resp.json()

    def get_file_nodes(self, file_key: str, node_ids: list) -> dict:
        url = f"{self.BASE_URL}/files/{file_key}/nodes"
        params = {"ids": ",".join(node_ids)}
        resp = self.session.get(url, params=params)
        resp.raise_for_status()
        return resp.json()

    def get_images(self, file_key: str, node_ids: list, format: str = "png", scale: float = 2) -> dict:
        url = f"{self.BASE_URL}/images/{file_key}"
        params = {"ids": ",".join(node_ids), "format": format, "scale": scale}
        resp = self.session.get(url, params=params)
        resp.raise_for_status()
        return resp.json()

    def get_me(self) -> dict:
        resp = self.session.get(f"{self.BASE_URL}/me")
        resp.raise_for_status()
        return resp.json()

    def download(self, url: str) -> bytes:
        # 圖片網址是預先簽章的 S3 連結，不帶 token
        resp = requests.get(url, timeout=60)
        resp.raise_for_status()
        return resp.content


_WEIGHT_LABELS = {
    100: "Thin", 200: "ExtraLight", 300: "Light", 400: "Regular",
    500: "Medium", 600: "SemiBold", 700: "Bold", 800: "ExtraBold", 900: "Black",
}


class FigmaToScene:
    """將 REST 節點 / 樣式 JSON 轉成 host 模型."""

    def __init__(self, plugin_namespace: str = PLUGIN_NAMESPACE):
        self.plugin_namespace = plugin_namespace

    def convert(self, figma_node: dict, parent_box: Optional[dict] = None) -> SceneNode:
        node_type = figma_node.get("type", "FRAME")
        bbox = figma_node.get("absoluteBoundingBox") or {}
        origin = parent_box or {}

        node = SceneNode(
            id=figma_node.get("id", ""),
            name=figma_node.get("name", "Unnamed"),
            type=node_type,
            x=bbox.get("x", 0) - origin.get("x", 0),
            y=bbox.get("y", 0) - origin.get("y", 0),
            width=bbox.get("width", 0),
            height=bbox.get("height", 0),
        )
        if node_type in EXPORTABLE_TYPES:
            # REST 省略 NONE 與 0 的欄位
            node.layout_mode = figma_node.get("layoutMode", "NONE")
            node.padding_left = figma_node.get("paddingLeft", 0)
            node.padding_right = figma_node.get("paddingRight", 0)
            node.padding_top = figma_node.get("paddingTop", 0)
            node.padding_bottom = figma_node.get("paddingBottom", 0)

        shared_data = figma_node.get("sharedPluginData", {})
        our_data = shared_data.get(self.plugin_namespace, {})
        if our_data:
            node.plugin_data = dict(our_data)

        if "children" in figma_node:
            node.children = [
                self.convert(c, bbox) for c in figma_node["children"]
                if c.get("visible", True)
            ]
        return node

    def select(self, document: dict, node_ids: Optional[list] = None, page_name: Optional[str] = None) -> list:
        """node_ids 指定時依順序取出；否則取頁面最上層節點."""
        if node_ids:
            selection = []
            seen = set()
            for node_id in node_ids:
                # 同一節點只取一次，Screen.id 在 session 內必須唯一
                if node_id in seen:
                    log.warn(f"Node {node_id} listed more than once, skipping duplicate")
                    continue
                seen.add(node_id)
                found = _find_node(document, node_id)
                if found is None:
                    log.warn(f"Node {node_id} not found in document")
                    continue
                selection.append(self.convert(found))
            return selection

        pages = document.get("children", [])
        if not pages:
            return []
        page = pages[0]
        if page_name:
            page = next((p for p in pages if p.get("name") == page_name), None)
            if page is None:
                log.warn(f"Page '{page_name}' not found")
                return []
        return [self.convert(c) for c in page.get("children", []) if c.get("visible", True)]

    def convert_styles(self, styles_meta: dict, style_nodes: dict) -> tuple:
        paint_styles, text_styles = [], []
        for style_id, meta in styles_meta.items():
            node = (style_nodes.get(style_id) or {}).get("document")
            if not node:
                continue
            style_type = meta.get("styleType")
            if style_type == "FILL":
                paint_styles.append(self.convert_paint_style(style_id, meta, node))
            elif style_type == "TEXT":
                text_styles.append(self.convert_text_style(style_id, meta, node))
        return paint_styles, text_styles

    def convert_paint_style(self, style_id: str, meta: dict, node: dict) -> PaintStyle:
        paints = []
        for fill in node.get("fills", []):
            if not fill.get("visible", True):
                continue
            c = fill.get("color", {})
            paints.append(Paint(
                type=fill.get("type", "SOLID"),
                color=(c.get("r", 0), c.get("g", 0), c.get("b", 0)),
                opacity=fill.get("opacity"),
            ))
        return PaintStyle(
            id=style_id,
            name=meta.get("name", node.get("name", "")),
            paints=paints,
            description=meta.get("description", ""),
        )

    def convert_text_style(self, style_id: str, meta: dict, node: dict) -> TextStyle:
        style = node.get("style", {})
        font_size = style.get("fontSize", 14)

        unit = style.get("lineHeightUnit")
        if unit == "PIXELS":
            line_height = LineHeight("PIXELS", style.get("lineHeightPx"))
        elif unit == "FONT_SIZE_%":
            line_height = LineHeight("PERCENT", style.get("lineHeightPercentFontSize", 100))
        else:
            line_height = LineHeight("AUTO")

        return TextStyle(
            id=style_id,
            name=meta.get("name", node.get("name", "")),
            font_family=style.get("fontFamily", "Inter"),
            font_style=style.get("fontStyle") or _font_style_label(style),
            font_size=font_size,
            line_height=line_height,
            letter_spacing=LetterSpacing("PIXELS", style.get("letterSpacing", 0)),
            description=meta.get("description", ""),
        )


def _font_style_label(style: dict) -> str:
    label = _WEIGHT_LABELS.get(int(style.get("fontWeight", 400)), "Regular")
    if style.get("italic"):
        return "Italic" if label == "Regular" else f"{label} Italic"
    return label


def _find_node(node: dict, node_id: str) -> Optional[dict]:
    if node.get("id") == node_id:
        return node
    for child in node.get("children", []):
        found = _find_node(child, node_id)
        if found is not None:
            return found
    return None


def image_filename(node_id: str) -> str:
    return node_id.replace(":", "-").replace(";", "_") + ".png"


class FigmaDocumentHost(SnapshotHost):
    """REST 快照 host；有 client 時向 Figma 要求渲染圖片."""

    def __init__(self, client: Optional[FigmaAPIClient] = None, file_key: Optional[str] = None, **kwargs):
        super().__init__(**kwargs)
        self.client = client
        self.file_key = file_key

    async def export_async(self, node: SceneNode, format: str = "PNG", scale: float = 2) -> bytes:
        if node.id in self.images:
            return self.images[node.id]
        if self.client is None or not self.file_key:
            raise HostExportError(f"No render available for node {node.id} ({node.name})")
        return await asyncio.to_thread(self._render, node, format, scale)

    def _render(self, node: SceneNode, format: str, scale: float) -> bytes:
        result = self.client.get_images(self.file_key, [node.id], format=format.lower(), scale=scale)
        url = (result.get("images") or {}).get(node.id)
        if result.get("err") or not url:
            raise HostExportError(f"Figma could not render node {node.id}: {result.get('err') or 'no image url'}")
        return self.client.download(url)


def fetch_snapshot(client: FigmaAPIClient, file_key: str) -> dict:
    """抓取檔案、本機樣式節點與目前使用者，組成可離線重播的快照."""
    figma_data = client.get_file(file_key)
    styles_meta = figma_data.get("styles", {})
    style_nodes = {}
    if styles_meta:
        style_nodes = client.get_file_nodes(file_key, list(styles_meta.keys())).get("nodes", {})
    try:
        user = client.get_me()
    except requests.RequestException as e:
        log.warn(f"Could not read current user: {e}")
        user = None
    return {
        "name": figma_data.get("name", "Untitled"),
        "document": figma_data.get("document", {}),
        "styles": styles_meta,
        "styleNodes": style_nodes,
        "user": user,
    }


def build_host(
    snapshot: dict,
    node_ids: Optional[list] = None,
    page_name: Optional[str] = None,
    client: Optional[FigmaAPIClient] = None,
    file_key: Optional[str] = None,
    images_dir: Optional[str] = None,
    extensions: Iterable[str] = (),
) -> FigmaDocumentHost:
    converter = FigmaToScene()
    selection = converter.select(snapshot.get("document", {}), node_ids, page_name)
    paint_styles, text_styles = converter.convert_styles(
        snapshot.get("styles", {}), snapshot.get("styleNodes", {})
    )

    images = {}
    if images_dir:
        for node in selection:
            path = Path(images_dir) / image_filename(node.id)
            if path.is_file():
                images[node.id] = path.read_bytes()

    user = snapshot.get("user") or {}
    return FigmaDocumentHost(
        client=client,
        file_key=file_key,
        document_name=snapshot.get("name", "Untitled"),
        user_name=user.get("handle"),
        selection=selection,
        paint_styles=paint_styles,
        text_styles=text_styles,
        images=images,
        extensions=extensions,
    )


def load_snapshot(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        snapshot = json.load(f)
    if not isinstance(snapshot, dict) or "document" not in snapshot:
        raise ValueError(f"'{path}' is not a Figma file snapshot (missing 'document')")
    return snapshot


def save_snapshot(snapshot: dict, path: str) -> str:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot, f, indent=2, ensure_ascii=False)
    return path
