"""
設定檔載入 / 驗證測試。警告走 stderr，不拋例外。
"""
import json

from figma_claude.config import load_config, validate_config


def write(tmp_path, data):
    path = tmp_path / "figma-claude.config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_missing_file_returns_empty(tmp_path):
    assert load_config(str(tmp_path / "nope.json")) == {}


def test_valid_config_no_warnings(tmp_path, capsys):
    cfg = {
        "figma": {"personalAccessToken": "t", "fileKey": "KEY"},
        "selection": {"nodeIds": ["1:2"], "page": "Page 1"},
        "export": {"outputDir": "out", "devMode": True},
    }
    assert load_config(write(tmp_path, cfg)) == cfg
    captured = capsys.readouterr()
    assert captured.err == ""
    assert captured.out == ""


def test_non_object_returns_empty(tmp_path, capsys):
    assert load_config(write(tmp_path, ["figma"])) == {}
    assert "格式錯誤" in capsys.readouterr().err


def test_unknown_keys_warned(capsys):
    validate_config({"figmaa": {}, "export": {"outdir": "x"}})
    err = capsys.readouterr().err
    assert "figmaa" in err
    assert "outdir" in err


def test_type_warnings(capsys):
    validate_config({
        "selection": {"nodeIds": "1:2"},
        "export": {"devMode": "yes"},
    })
    err = capsys.readouterr().err
    assert "selection.nodeIds" in err
    assert "export.devMode" in err


def test_section_not_object(capsys):
    validate_config({"export": "out"})
    assert "'export' 應為 JSON 物件" in capsys.readouterr().err


def test_missing_images_dir(tmp_path, capsys):
    validate_config({"export": {"imagesDir": str(tmp_path / "missing")}})
    assert "imagesDir" in capsys.readouterr().err
