"""設定檔載入與基本驗證."""

import json
from pathlib import Path
from typing import Any

from . import log

DEFAULT_CONFIG_PATH = "figma-claude.config.json"
DEFAULT_OUTPUT_DIR = "figma-claude-export"

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"figma", "selection", "export"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "figma": {"personalAccessToken", "fileKey"},
    "selection": {"nodeIds", "page"},
    "export": {"outputDir", "devMode", "imagesDir"},
}


def _warn(msg: str) -> None:
    log.warn(f"[config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    # selection.nodeIds 應為字串陣列
    node_ids = _section(cfg, "selection").get("nodeIds")
    if node_ids is not None and (
        not isinstance(node_ids, list) or not all(isinstance(n, str) for n in node_ids)
    ):
        _warn("selection.nodeIds 應為字串陣列（例如 [\"1:2\", \"1:3\"]）")

    dev_mode = _section(cfg, "export").get("devMode")
    if dev_mode is not None and not isinstance(dev_mode, bool):
        _warn(f"export.devMode 應為 true / false，目前是 {type(dev_mode).__name__}")

    # imagesDir 存在性提示（離線快照才需要）
    images_dir = _section(cfg, "export").get("imagesDir")
    if images_dir and not Path(images_dir).exists():
        _warn(f"export.imagesDir '{images_dir}' 目錄不存在（離線快照將沒有圖片）")


def _section(cfg: dict, name: str) -> dict:
    section = cfg.get(name, {})
    return section if isinstance(section, dict) else {}


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        _warn(f"'{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg
