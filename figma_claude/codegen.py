"""
Dev Mode 程式碼產生介面

host 的 codegen API 尚無正式文件，PlaceholderCodegen 只輸出以節點命名的骨架文字；
有真正來源時換成另一個 CodegenPort 子類別。
"""

import re

from .host import SceneNode
from .models import ComponentStructure


def _kebab_class(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


class CodegenPort:
    """Dev Mode 可用時，逐節點產生程式碼."""

    async def generate_css(self, node: SceneNode) -> str:
        raise NotImplementedError

    async def generate_react(self, node: SceneNode) -> str:
        raise NotImplementedError

    async def generate_tailwind(self, node: SceneNode) -> str:
        raise NotImplementedError

    def extract_component_structure(self, node: SceneNode) -> ComponentStructure:
        return extract_component_structure(node)


class PlaceholderCodegen(CodegenPort):

    async def generate_css(self, node: SceneNode) -> str:
        return (
            f"/* CSS for {node.name} */\n"
            f".{_kebab_class(node.name)} {{\n"
            "  /* CSS properties would go here */\n"
            "}"
        )

    async def generate_react(self, node: SceneNode) -> str:
        component = re.sub(r"\s+", "", node.name)
        return (
            f"// React component for {node.name}\n"
            "import React from 'react';\n\n"
            f"export function {component}() {{\n"
            "  return (\n"
            f"    <div className=\"{_kebab_class(node.name)}\">\n"
            "      {/* Component content would go here */}\n"
            "    </div>\n"
            "  );\n"
            "}"
        )

    async def generate_tailwind(self, node: SceneNode) -> str:
        return (
            f"<!-- Tailwind HTML for {node.name} -->\n"
            "<div class=\"w-full h-full flex items-center justify-center\">\n"
            "  <!-- Content would go here -->\n"
            "</div>"
        )


def extract_component_structure(node: SceneNode) -> ComponentStructure:
    """節點摘要加上一層子節點摘要（不遞迴）."""
    structure = ComponentStructure(name=node.name, type=node.type, id=node.id)
    if node.has_children:
        structure.children = [
            ComponentStructure(name=child.name, type=child.type, id=child.id)
            for child in node.children
        ]
    return structure
