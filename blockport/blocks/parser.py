"""Recursive parser for comment-delimited block markup.

Markup looks like::

    <!-- wp:columns {"align":"wide"} -->
    <div class="wp-block-columns">
      <!-- wp:column --> ... <!-- /wp:column -->
    </div>
    <!-- /wp:columns -->
    <!-- wp:separator /-->

Openers and closers are matched on a stack by (namespace, name), so a child
block with the same name as its parent never closes the parent early.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Iterable

from blockport.blocks.models import ContentBlock
from blockport.common.models import ParseOptions
from blockport.common.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_NAMESPACE = "core"

MARKER_RE = re.compile(
    r"<!--\s+(?P<closer>/)?wp:(?P<ns>[a-z][a-z0-9_-]*/)?(?P<name>[a-z][a-z0-9_-]*)\s+"
    r"(?P<attrs>\{(?:(?!-->).)*?\}\s+)?(?P<void>/)?-->",
    re.DOTALL,
)


@dataclass
class _Frame:
    namespace: str
    name: str
    attributes: dict[str, Any]
    start: int  # offset right after the opener
    opaque: bool = False  # deeper than max_depth: matched, but never becomes a block
    children: list[ContentBlock] = field(default_factory=list)


def parse_attributes(raw: str | None) -> dict[str, Any]:
    """Decode a marker's JSON attributes; anything unusable becomes {}."""
    if not raw or not raw.strip():
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Malformed block attributes %r: %s", raw.strip()[:80], e)
        return {}
    if not isinstance(value, dict):
        logger.warning("Block attributes are not an object: %r", raw.strip()[:80])
        return {}
    return value


class BlockParser:
    """Stack-based block markup parser. Stateless between `parse` calls."""

    def __init__(self, options: ParseOptions | None = None):
        self.options = options or ParseOptions()

    def parse(self, content: str) -> list[ContentBlock]:
        if not content:
            return []

        root = _Frame(namespace="", name="", attributes={}, start=0)
        stack: list[_Frame] = [root]

        for marker in MARKER_RE.finditer(content):
            namespace = (marker.group("ns") or f"{DEFAULT_NAMESPACE}/")[:-1]
            name = marker.group("name")

            if marker.group("closer"):
                self._close(content, stack, namespace, name, marker.start())
                continue

            depth = len(stack)  # depth this block would sit at (root excluded)
            opaque = stack[-1].opaque or depth > self.options.max_depth

            if marker.group("void"):
                if not opaque:
                    attributes = parse_attributes(marker.group("attrs"))
                    self._attach(stack[-1], ContentBlock(namespace=namespace, name=name, attributes=attributes))
                continue

            attributes = {} if opaque else parse_attributes(marker.group("attrs"))
            stack.append(_Frame(namespace, name, attributes, marker.end(), opaque=opaque))

        # anything left open closes at end of input
        while len(stack) > 1:
            frame = stack.pop()
            logger.debug("Unclosed block %s/%s closed at end of input", frame.namespace, frame.name)
            self._finish(content, stack[-1], frame, len(content))

        return root.children

    def _close(self, content: str, stack: list[_Frame], namespace: str, name: str, end: int) -> None:
        for index in range(len(stack) - 1, 0, -1):
            if stack[index].namespace == namespace and stack[index].name == name:
                break
        else:
            logger.debug("Stray closer for %s/%s ignored", namespace, name)
            return

        # blocks opened above the match were never closed; they end here too
        while len(stack) > index:
            frame = stack.pop()
            self._finish(content, stack[-1], frame, end)

    def _finish(self, content: str, parent: _Frame, frame: _Frame, end: int) -> None:
        if frame.opaque:
            return  # its text stays inside the parent's raw slice
        block = ContentBlock(
            namespace=frame.namespace,
            name=frame.name,
            attributes=frame.attributes,
            raw_inner_content=content[frame.start : end].strip(),
            children=frame.children,
        )
        self._attach(parent, block)

    def _attach(self, parent: _Frame, block: ContentBlock) -> None:
        if not self.options.allows(block.namespace, block.name):
            return
        if self.options.skip_empty and block.is_empty:
            return
        parent.children.append(block)


def parse_blocks(content: str, options: ParseOptions | None = None) -> list[ContentBlock]:
    """Parse block markup into a tree of ContentBlocks."""
    return BlockParser(options).parse(content)


def has_block_markup(html: str | None) -> bool:
    """Quick check: does this HTML carry any block markers at all?"""
    return bool(html) and MARKER_RE.search(html) is not None


def count_blocks(blocks: Iterable[ContentBlock]) -> int:
    """Total number of blocks, nested ones included."""
    return sum(1 + count_blocks(block.children) for block in blocks)


def strip_block_markers(html: str) -> str:
    """Remove every block marker, leaving the rendered HTML."""
    return MARKER_RE.sub("", html or "").strip()
