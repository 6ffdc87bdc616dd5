"""
Frame 擷取 — 將 selection 中的 frame / component / instance 匯出為 Screen

單一節點失敗只會略過該節點；Dev Mode 程式碼擷取失敗只會少掉程式碼欄位。
"""

from typing import Callable, Optional

from . import log
from .codegen import CodegenPort, PlaceholderCodegen
from .host import EXPORTABLE_TYPES, DocumentHost, SceneNode
from .models import DevModeSupport, ExtractionSession, Screen

# 存在任一個即視為 Dev Mode 可用（host API 尚無正式文件）
DEV_MODE_EXTENSIONS = ("devMode", "codegen")

EXPORT_FORMAT = "PNG"
EXPORT_SCALE = 2
EMPTY_SELECTION_MESSAGE = "Please select at least one frame to export"


def is_dev_mode_available(host: DocumentHost) -> bool:
    return any(host.has_extension(name) for name in DEV_MODE_EXTENSIONS)


def initialize_dev_mode_support(session: ExtractionSession, host: DocumentHost) -> bool:
    """探測 host 是否提供 Dev Mode，結果記錄在 session 上."""
    session.dev_mode = DevModeSupport(available=is_dev_mode_available(host))
    if session.dev_mode.available:
        log.info("🛠️  Dev Mode available, collecting code snippets")
    return session.dev_mode.available


async def extract_selected_frames(
    session: ExtractionSession,
    host: DocumentHost,
    post_message: Callable[[dict], None],
    codegen: Optional[CodegenPort] = None,
) -> None:
    selection = host.selection()
    if not selection:
        post_message({
            "type": "error",
            "message": EMPTY_SELECTION_MESSAGE,
            "context": "screens",
        })
        return

    post_message({"type": "extraction-started"})
    codegen = codegen or PlaceholderCodegen()
    session.screens = []

    for node in selection:
        if node.type not in EXPORTABLE_TYPES:
            continue
        try:
            screen = await _export_screen(host, node)
        except Exception as e:
            log.warn(f"Error exporting frame '{node.name}' ({node.id}): {e}")
            continue

        if session.dev_mode_available:
            await _attach_code(screen, node, codegen)

        session.screens.append(screen)

    post_message({
        "type": "extraction-completed",
        "data": [screen.to_dict() for screen in session.screens],
    })


async def _export_screen(host: DocumentHost, node: SceneNode) -> Screen:
    data = await host.export_async(node, format=EXPORT_FORMAT, scale=EXPORT_SCALE)
    return Screen(
        id=node.id,
        name=node.name,
        type=node.type,
        width=node.width,
        height=node.height,
        image=host.base64_encode(data),
        description=host.get_plugin_data(node, "description") or "",
    )


async def _attach_code(screen: Screen, node: SceneNode, codegen: CodegenPort) -> None:
    # 全部成功才寫入，避免半套程式碼欄位
    try:
        css = await codegen.generate_css(node)
        react = await codegen.generate_react(node)
        tailwind = await codegen.generate_tailwind(node)
        structure = codegen.extract_component_structure(node)
    except Exception as e:
        log.warn(f"Error extracting code for '{node.name}' ({node.id}): {e}")
        return
    screen.css_code = css
    screen.react_code = react
    screen.tailwind_code = tailwind
    screen.component_structure = structure
