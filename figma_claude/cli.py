#!/usr/bin/env python3
"""
figma-claude CLI — Figma 設計 → 設計文件 / Claude 匯出

  python -m figma_claude.cli snapshot --file-key KEY -o snap.json   # 抓取離線快照
  python -m figma_claude.cli extract --snapshot snap.json           # 匯出畫面 JSON
  python -m figma_claude.cli styles --file-key KEY                  # 顏色 / 字體 / 間距
  python -m figma_claude.cli docs --snapshot snap.json              # Markdown 設計文件
  python -m figma_claude.cli export --snapshot snap.json            # Claude payload
  python -m figma_claude.cli run --snapshot snap.json -o ./out      # 全部寫成匯出目錄
  python -m figma_claude.cli watch snap.json -o ./out               # 快照變更時自動重跑
"""

import argparse
import asyncio
import json
import os
import sys
import threading
import time
from typing import Optional

import requests
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from figma_claude import __version__

from . import log
from .config import DEFAULT_OUTPUT_DIR, load_config
from .design_assets import write_export_bundle
from .figma_reader import FigmaAPIClient, build_host, fetch_snapshot, load_snapshot, save_snapshot
from .plugin import PluginController, RequestKind

_PROGRESS = {
    "extraction-started": "📸 Exporting selected frames...",
    "styles-extraction-started": "🎨 Reading color / text styles...",
}

DOC_PIPELINE = (
    RequestKind.EXTRACT_SELECTED,
    RequestKind.EXTRACT_STYLES,
    RequestKind.GENERATE_DOCUMENTATION,
)
FULL_PIPELINE = DOC_PIPELINE + (RequestKind.EXPORT_CLAUDE,)


def _reporter(replies: list):
    """post_message 實作：收集回覆並印出進度."""
    def post(message: dict) -> None:
        replies.append(message)
        kind = message.get("type")
        if kind in _PROGRESS:
            log.info(_PROGRESS[kind])
        elif kind == "extraction-completed":
            log.info(f"✅ Exported {len(message['data'])} screens")
        elif kind == "styles-extraction-completed":
            data = message["data"]
            log.info(
                f"✅ {len(data['colors'])} colors, {len(data['typography'])} text styles, "
                f"{len(data['spacing'])} spacing values"
            )
        elif kind == "error":
            log.warn(message.get("message", "unknown error"))
    return post


def _find_reply(replies: list, kind: str) -> Optional[dict]:
    for message in reversed(replies):
        if message.get("type") == kind:
            return message
    return None


async def run_pipeline(host, kinds) -> tuple:
    """依序送出請求，回傳 (controller, replies)."""
    replies: list = []
    controller = PluginController(host, _reporter(replies))
    for kind in kinds:
        await controller.handle({"type": kind.value})
    return controller, replies


def _emit(text: str, output: Optional[str]) -> None:
    if not output:
        print(text)
        return
    parent = os.path.dirname(output)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(text)
    log.info(f"📄 Saved to {output}")


def _dump(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _parse_node_ids(raw: Optional[str]) -> Optional[list]:
    if not raw:
        return None
    ids = [part.strip() for part in raw.split(",") if part.strip()]
    return ids or None


def _api_client(args, config: dict):
    figma_cfg = config.get("figma", {})
    token = figma_cfg.get("personalAccessToken") or os.environ.get("FIGMA_TOKEN")
    file_key = getattr(args, "file_key", None) or figma_cfg.get("fileKey")

    if not token:
        log.error("請設定 FIGMA_TOKEN 環境變數，或在 figma-claude.config.json 的 figma.personalAccessToken 設定。")
        log.info("取得方式：Figma → Settings → Personal access tokens → 新增")
        return None, None
    if not file_key:
        log.error("請使用 --file-key 或在 config 的 figma.fileKey 設定 Figma 檔案 key。")
        return None, None
    return FigmaAPIClient(token), file_key


def _report_api_error(e: Exception, file_key: str) -> None:
    status = getattr(getattr(e, "response", None), "status_code", None)
    if status == 403:
        log.error("Figma API 403：Token 無效或已過期，請重新產生 FIGMA_TOKEN。")
    elif status == 404:
        log.error(f"Figma API 404：找不到檔案 '{file_key}'，請確認 file key 是否正確。")
    else:
        log.error(f"Figma API 錯誤：{e}")


def build_host_from_args(args, config: dict):
    """依 --snapshot 或 --file-key 建立 host；失敗時回傳 None."""
    selection_cfg = config.get("selection", {})
    export_cfg = config.get("export", {})
    node_ids = _parse_node_ids(args.node_ids) or selection_cfg.get("nodeIds")
    page = args.page or selection_cfg.get("page")
    images_dir = args.images_dir or export_cfg.get("imagesDir")
    extensions = ("devMode",) if (args.dev_mode or export_cfg.get("devMode")) else ()

    if args.snapshot:
        try:
            snapshot = load_snapshot(args.snapshot)
        except (OSError, ValueError) as e:
            log.error(f"無法讀取快照 '{args.snapshot}'：{e}")
            return None
        return build_host(snapshot, node_ids, page, images_dir=images_dir, extensions=extensions)

    client, file_key = _api_client(args, config)
    if client is None:
        return None
    log.info(f"📥 Reading Figma file: {file_key}")
    try:
        snapshot = fetch_snapshot(client, file_key)
    except requests.RequestException as e:
        _report_api_error(e, file_key)
        return None
    return build_host(
        snapshot, node_ids, page,
        client=client, file_key=file_key, images_dir=images_dir, extensions=extensions,
    )


def cmd_snapshot(args, config: dict) -> int:
    """Snapshot: 抓取 Figma 檔案與樣式節點存成 JSON."""
    client, file_key = _api_client(args, config)
    if client is None:
        return 1
    log.info(f"📥 Saving snapshot of {file_key}")
    try:
        snapshot = fetch_snapshot(client, file_key)
    except requests.RequestException as e:
        _report_api_error(e, file_key)
        return 1
    path = save_snapshot(snapshot, args.output or "figma-snapshot.json")
    log.info(f"✅ Saved to {path}")
    return 0


def cmd_extract(args, config: dict) -> int:
    host = build_host_from_args(args, config)
    if host is None:
        return 1
    _, replies = asyncio.run(run_pipeline(host, (RequestKind.EXTRACT_SELECTED,)))
    if _find_reply(replies, "error"):
        return 1
    screens = _find_reply(replies, "extraction-completed")["data"]
    if args.no_images:
        screens = [{k: v for k, v in s.items() if k != "image"} for s in screens]
    _emit(_dump(screens), args.output)
    return 0


def cmd_styles(args, config: dict) -> int:
    host = build_host_from_args(args, config)
    if host is None:
        return 1
    _, replies = asyncio.run(run_pipeline(host, (RequestKind.EXTRACT_STYLES,)))
    _emit(_dump(_find_reply(replies, "styles-extraction-completed")["data"]), args.output)
    return 0


def cmd_docs(args, config: dict) -> int:
    host = build_host_from_args(args, config)
    if host is None:
        return 1
    _, replies = asyncio.run(run_pipeline(host, DOC_PIPELINE))
    _emit(_find_reply(replies, "documentation-generated")["markdown"], args.output)
    return 0


def cmd_export(args, config: dict) -> int:
    host = build_host_from_args(args, config)
    if host is None:
        return 1
    _, replies = asyncio.run(run_pipeline(host, FULL_PIPELINE))
    _emit(_dump(_find_reply(replies, "claude-export-ready")["data"]), args.output)
    return 0


def perform_run(args, config: dict) -> int:
    """Run: 擷取 → 文件 → Claude 匯出，寫成匯出目錄."""
    host = build_host_from_args(args, config)
    if host is None:
        return 1
    controller, replies = asyncio.run(run_pipeline(host, FULL_PIPELINE))
    output_dir = args.output or config.get("export", {}).get("outputDir") or DEFAULT_OUTPUT_DIR
    paths = write_export_bundle(
        output_dir,
        controller.session,
        _find_reply(replies, "documentation-generated")["markdown"],
        _find_reply(replies, "claude-export-ready")["data"],
    )
    log.info(f"✅ Wrote {len(paths)} files to {output_dir}")
    return 0


def cmd_run(args, config: dict) -> int:
    return perform_run(args, config)


_WATCHED_EXTENSIONS = (".json", ".png")


class ChangeHandler(FileSystemEventHandler):
    """快照 / 圖片變更事件處理器，帶 debounce 防抖。"""

    def __init__(self, callback, debounce: float = 1.0, ignore_dirs=()):
        self.callback = callback
        self.last_trigger = 0.0
        self.debounce_seconds = debounce
        self.ignore_dirs = [os.path.abspath(d) for d in ignore_dirs]

    def _ignored(self, path: str) -> bool:
        path = os.path.abspath(path)
        return any(path == d or path.startswith(d + os.sep) for d in self.ignore_dirs)

    def on_modified(self, event):
        if event.is_directory:
            return
        if not event.src_path.endswith(_WATCHED_EXTENSIONS):
            return
        # 匯出目錄本身的寫入不可再觸發
        if self._ignored(event.src_path):
            return
        current_time = time.time()
        if current_time - self.last_trigger < self.debounce_seconds:
            return
        self.last_trigger = current_time
        log.info(f"🔄 File changed: {event.src_path}")
        self.callback()


def cmd_watch(args, config: dict) -> int:
    """Watch: 監聽快照變更並自動執行 run."""
    args.snapshot = args.snapshot_path
    output_dir = args.output or config.get("export", {}).get("outputDir") or DEFAULT_OUTPUT_DIR
    args.output = output_dir
    watch_dir = os.path.dirname(os.path.abspath(args.snapshot)) or "."
    log.info(f"👀 Watching '{args.snapshot}' for changes... (Ctrl+C to stop)")

    # run 內部使用 asyncio.run，放到單一工作執行緒避免與 observer 執行緒重疊
    lock = threading.Lock()

    def run_once():
        with lock:
            try:
                perform_run(args, config)
            except Exception as e:
                log.warn(f"Run failed: {e}")

    run_once()

    handler = ChangeHandler(
        lambda: threading.Thread(target=run_once, daemon=True).start(),
        ignore_dirs=[output_dir],
    )
    observer = Observer()
    observer.schedule(handler, path=watch_dir, recursive=True)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        log.info("👋 Stopping watch...")
        observer.stop()
    finally:
        observer.join()
    return 0


def _add_host_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--file-key", help="Figma file key (uses FIGMA_TOKEN)")
    p.add_argument("--snapshot", help="Offline snapshot JSON written by 'snapshot'")
    p.add_argument("--node-ids", help="Comma separated node ids to treat as the selection")
    p.add_argument("--page", help="Page name (default: first page) when --node-ids is omitted")
    p.add_argument("--images-dir", help="Directory of pre-rendered <node-id>.png files")
    p.add_argument("--dev-mode", action="store_true", help="Expose the Dev Mode surface (adds code snippets)")
    p.add_argument("--output", "-o", help="Output file (default: stdout)")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="figma-claude: Figma designs → documentation & Claude export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default="figma-claude.config.json", help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    snap_p = sub.add_parser("snapshot", help="Save a Figma file as an offline snapshot")
    snap_p.add_argument("--file-key", help="Figma file key")
    snap_p.add_argument("--output", "-o", help="Snapshot path (default: figma-snapshot.json)")

    extract_p = sub.add_parser("extract", help="Export the selected frames as screens JSON")
    _add_host_args(extract_p)
    extract_p.add_argument("--no-images", action="store_true", help="Drop base64 images from the output")

    styles_p = sub.add_parser("styles", help="Extract color / typography / spacing styles")
    _add_host_args(styles_p)

    docs_p = sub.add_parser("docs", help="Generate Markdown design documentation")
    _add_host_args(docs_p)

    export_p = sub.add_parser("export", help="Build the Claude export payload")
    _add_host_args(export_p)

    run_p = sub.add_parser("run", help="Write documentation, Claude export and images to a directory",
        epilog="Examples:\n  figma-claude run --file-key ABC123 -o ./design-export\n  figma-claude run --snapshot snap.json --node-ids 1:2,1:3",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_host_args(run_p)

    watch_p = sub.add_parser("watch", help="Re-run 'run' whenever the snapshot changes")
    watch_p.add_argument("snapshot_path", help="Snapshot JSON to watch")
    _add_host_args(watch_p)

    args = parser.parse_args(argv)
    config = load_config(args.config)

    commands = {
        "snapshot": cmd_snapshot,
        "extract": cmd_extract,
        "styles": cmd_styles,
        "docs": cmd_docs,
        "export": cmd_export,
        "run": cmd_run,
        "watch": cmd_watch,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 0
    return command(args, config)


if __name__ == "__main__":
    sys.exit(main())
