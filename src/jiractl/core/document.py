"""Plain-text extraction from Atlassian Document Format trees."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


class NodeKind(enum.Enum):
    """Document node types the extractor distinguishes.

    Anything not listed (including malformed nodes) maps to UNKNOWN and is
    still walked for its text and children.
    """

    DOC = "doc"
    TEXT = "text"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    BLOCKQUOTE = "blockquote"
    CODE_BLOCK = "codeBlock"
    MEDIA_SINGLE = "mediaSingle"
    RULE = "rule"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "NodeKind":
        return cls.UNKNOWN


BLOCK_KINDS = frozenset(
    {
        NodeKind.PARAGRAPH,
        NodeKind.HEADING,
        NodeKind.BULLET_LIST,
        NodeKind.ORDERED_LIST,
        NodeKind.BLOCKQUOTE,
        NodeKind.CODE_BLOCK,
        NodeKind.MEDIA_SINGLE,
        NodeKind.RULE,
    }
)


@dataclass(frozen=True)
class DocumentNode:
    """One node of a parsed document tree."""

    kind: NodeKind
    type: str = ""
    text: str | None = None
    # None when the source node had no content list.
    children: tuple["DocumentNode", ...] | None = None

    @property
    def is_block(self) -> bool:
        return self.kind in BLOCK_KINDS


EMPTY_NODE = DocumentNode(kind=NodeKind.UNKNOWN)


def parse_document(raw: object) -> DocumentNode:
    """Parse a decoded JSON value into a DocumentNode tree.

    Non-mapping values become an empty UNKNOWN node; fields of the wrong type
    are ignored.
    """
    if not isinstance(raw, Mapping):
        return EMPTY_NODE

    node_type = raw.get("type")
    node_type = node_type if isinstance(node_type, str) else ""
    text = raw.get("text")
    content = raw.get("content")
    children: tuple[DocumentNode, ...] | None = None
    if isinstance(content, list):
        children = tuple(parse_document(child) for child in content)

    return DocumentNode(
        kind=NodeKind(node_type),
        type=node_type,
        text=text if isinstance(text, str) else None,
        children=children,
    )


def extract_text(doc: DocumentNode | Mapping[str, Any] | str | None) -> str:
    """Flatten a document (or a plain string) into text.

    Block-level siblings are separated by one newline and each list item ends
    its own line. Never raises on unexpected shapes.
    """
    if doc is None:
        return ""
    if isinstance(doc, str):
        return doc
    if isinstance(doc, Mapping):
        doc = parse_document(doc)
    if not isinstance(doc, DocumentNode):
        return ""

    parts: list[str] = []
    _walk(doc, parts)
    return "".join(parts).strip()


def _walk(node: DocumentNode, parts: list[str]) -> None:
    if node.text is not None:
        parts.append(node.text)
    if node.children is None:
        return

    last_index = len(node.children) - 1
    for index, child in enumerate(node.children):
        _walk(child, parts)
        if child.is_block and index < last_index:
            parts.append("\n")

    if node.kind is NodeKind.LIST_ITEM:
        parts.append("\n")


def build_plain_document(text: str) -> dict[str, Any]:
    """Wrap plain text in the minimal ADF document the API accepts."""
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}],
            }
        ],
    }
