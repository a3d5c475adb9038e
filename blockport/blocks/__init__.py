"""Block input side: markup parsing, snapshot models and page capture."""

from blockport.blocks.models import ContentBlock, ElementSnapshot, PageCapture
from blockport.blocks.parser import (
    BlockParser,
    count_blocks,
    has_block_markup,
    parse_blocks,
    strip_block_markers,
)

__all__ = [
    "BlockParser",
    "ContentBlock",
    "ElementSnapshot",
    "PageCapture",
    "count_blocks",
    "has_block_markup",
    "parse_blocks",
    "strip_block_markers",
]
