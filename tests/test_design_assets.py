"""
匯出目錄寫檔測試。
"""
import base64
import json

from figma_claude.design_assets import write_export_bundle, write_screen_images
from figma_claude.models import ExtractionSession, Screen, SessionMetadata

PNG = b"\x89PNG\r\n\x1a\nfake"


def make_session(*names):
    meta = SessionMetadata(project_name="Acme App", date="2024-05-01T09:00:00+00:00", author="Mei")
    screens = [
        Screen(id=f"1:{i}", name=name, type="FRAME", width=100, height=100,
               image=base64.b64encode(PNG).decode("ascii"))
        for i, name in enumerate(names)
    ]
    return ExtractionSession(metadata=meta, screens=screens)


def test_images_decoded_and_deduplicated(tmp_path):
    written = write_screen_images(str(tmp_path), make_session("Sign In", "Sign In", "Sign  In!", "???"))
    assert [rel for _, rel in written] == [
        "images/sign-in.png",
        "images/sign-in-2.png",
        "images/sign-in-3.png",
        "images/unnamed.png",
    ]
    assert (tmp_path / "images" / "sign-in-2.png").read_bytes() == PNG


def test_bundle_files(tmp_path):
    session = make_session("Home")
    payload = {"designMetadata": {"projectName": "Acme App"}}
    paths = write_export_bundle(str(tmp_path / "out"), session, "# Acme App\n", payload)

    out = tmp_path / "out"
    assert len(paths) == 4
    assert (out / "design-documentation.md").read_text(encoding="utf-8") == "# Acme App\n"
    assert json.loads((out / "claude-export.json").read_text(encoding="utf-8")) == payload

    manifest = json.loads((out / "manifest.json").read_text(encoding="utf-8"))
    assert manifest["project"] == "Acme App"
    assert manifest["screenCount"] == 1
    assert manifest["screens"] == [{"id": "1:0", "name": "Home", "image": "images/home.png"}]


def test_empty_session_bundle(tmp_path):
    paths = write_export_bundle(str(tmp_path), make_session(), "", {})
    assert (tmp_path / "images").is_dir()
    assert len(paths) == 3
