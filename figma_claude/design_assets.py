"""
匯出目錄 — 文件、Claude payload 與畫面圖片

Claude payload 不含圖片，圖片以獨立 PNG 檔寫入 images/，
manifest.json 記錄畫面與檔案的對應。
"""

import base64
import json
import os
from datetime import datetime, timezone

from .models import ExtractionSession


def _kebab(name: str) -> str:
    out = []
    for ch in name:
        if ch.isalnum():
            out.append(ch.lower())
        else:
            out.append("-")
    slug = "".join(out).strip("-")
    while "--" in slug:
        slug = slug.replace("--", "-")
    return slug or "unnamed"


def _write_json(path: str, data) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def write_screen_images(output_dir: str, session: ExtractionSession) -> list:
    """將每個 Screen 的 base64 圖片解碼寫檔，回傳 [(screen, 相對路徑)]."""
    images_dir = os.path.join(output_dir, "images")
    os.makedirs(images_dir, exist_ok=True)

    written = []
    used = set()
    for screen in session.screens:
        slug = _kebab(screen.name)
        candidate, n = slug, 2
        while candidate in used:
            candidate = f"{slug}-{n}"
            n += 1
        used.add(candidate)

        rel_path = f"images/{candidate}.png"
        with open(os.path.join(output_dir, rel_path), "wb") as f:
            f.write(base64.b64decode(screen.image))
        written.append((screen, rel_path))
    return written


def write_export_bundle(
    output_dir: str,
    session: ExtractionSession,
    markdown: str,
    payload: dict,
) -> list:
    """寫出完整匯出目錄，回傳所有寫入的檔案路徑."""
    os.makedirs(output_dir, exist_ok=True)
    paths = []

    doc_path = os.path.join(output_dir, "design-documentation.md")
    with open(doc_path, "w", encoding="utf-8") as f:
        f.write(markdown)
    paths.append(doc_path)

    export_path = os.path.join(output_dir, "claude-export.json")
    _write_json(export_path, payload)
    paths.append(export_path)

    images = write_screen_images(output_dir, session)
    paths.extend(os.path.join(output_dir, rel) for _, rel in images)

    manifest = {
        "project": session.metadata.project_name,
        "author": session.metadata.author,
        "sessionStartedAt": session.metadata.date,
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "screenCount": len(session.screens),
        "screens": [
            {"id": screen.id, "name": screen.name, "image": rel}
            for screen, rel in images
        ],
        "documentation": "design-documentation.md",
        "claudeExport": "claude-export.json",
    }
    manifest_path = os.path.join(output_dir, "manifest.json")
    _write_json(manifest_path, manifest)
    paths.append(manifest_path)
    return paths
