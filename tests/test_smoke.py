"""
Smoke tests：驗證套件可匯入、版本與公開 API 存在。
"""
import asyncio


def test_import_package():
    """套件可正常匯入"""
    import figma_claude
    assert figma_claude.__version__ == "0.3.0"


def test_public_api():
    """公開 API 可從 figma_claude 取得"""
    from figma_claude import (
        __version__,
        SnapshotHost,
        PluginController,
        RequestKind,
        export_for_claude,
        generate_documentation,
        build_host,
        load_config,
    )
    assert __version__ == "0.3.0"
    assert callable(export_for_claude)
    assert callable(generate_documentation)
    assert callable(build_host)
    assert callable(load_config)
    assert {k.value for k in RequestKind} == {
        "extract-selected",
        "extract-styles",
        "generate-documentation",
        "export-claude",
        "cancel",
    }
    assert PluginController(SnapshotHost(), lambda m: None).closed is False


def test_controller_round_trip_on_empty_document():
    """空文件也能產生文件與匯出 payload"""
    from figma_claude import PluginController, SnapshotHost

    messages = []
    controller = PluginController(SnapshotHost(document_name="Blank"), messages.append)

    async def go():
        await controller.handle({"type": "extract-styles"})
        await controller.handle({"type": "generate-documentation"})
        await controller.handle({"type": "export-claude"})

    asyncio.run(go())
    assert messages[-2]["markdown"].startswith("# Blank - Design Documentation")
    assert messages[-1]["data"]["designSystem"] == {"colors": [], "typography": [], "spacing": []}
