"""
外掛訊息處理 — UI 送來的請求 → 對應的擷取 / 產出流程

每則訊息由 PluginController.handle() 處理完才會收下一則（host 保證序列化）。
"""

from enum import Enum
from typing import Callable, Optional

from .claude_export import export_for_claude
from .codegen import CodegenPort, PlaceholderCodegen
from .documentation import generate_documentation
from .frame_extractor import extract_selected_frames, initialize_dev_mode_support
from .host import DocumentHost
from .models import ExtractionSession
from .style_extractor import extract_design_styles


class RequestKind(str, Enum):
    EXTRACT_SELECTED = "extract-selected"
    EXTRACT_STYLES = "extract-styles"
    GENERATE_DOCUMENTATION = "generate-documentation"
    EXPORT_CLAUDE = "export-claude"
    CANCEL = "cancel"

    @classmethod
    def parse(cls, tag) -> Optional["RequestKind"]:
        try:
            return cls(tag)
        except ValueError:
            return None


class PluginController:
    """持有單次外掛執行的 session，回應 UI 請求."""

    def __init__(
        self,
        host: DocumentHost,
        post_message: Callable[[dict], None],
        codegen: Optional[CodegenPort] = None,
        color_mapper: Optional[Callable[[str], str]] = None,
    ):
        self.host = host
        self.post_message = post_message
        self.codegen = codegen or PlaceholderCodegen()
        self.color_mapper = color_mapper
        self.session: Optional[ExtractionSession] = ExtractionSession.start(host)

    @property
    def closed(self) -> bool:
        return self.session is None

    async def handle(self, message: dict) -> None:
        """依請求執行對應流程；未知的 type 直接忽略."""
        if self.closed or not isinstance(message, dict):
            return
        kind = RequestKind.parse(message.get("type"))
        if kind is None:
            return

        if kind is RequestKind.EXTRACT_SELECTED:
            initialize_dev_mode_support(self.session, self.host)
            await extract_selected_frames(self.session, self.host, self.post_message, self.codegen)
        elif kind is RequestKind.EXTRACT_STYLES:
            await extract_design_styles(self.session, self.host, self.post_message)
        elif kind is RequestKind.GENERATE_DOCUMENTATION:
            self.post_message({
                "type": "documentation-generated",
                "markdown": generate_documentation(self.session),
            })
        elif kind is RequestKind.EXPORT_CLAUDE:
            self.post_message({
                "type": "claude-export-ready",
                "data": export_for_claude(self.session, self.color_mapper),
            })
        elif kind is RequestKind.CANCEL:
            self.session = None
            self.host.close()
