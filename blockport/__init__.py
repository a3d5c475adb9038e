"""Main entrypoint. Exposes the public API."""

from blockport.blocks import ContentBlock, ElementSnapshot, count_blocks, has_block_markup, parse_blocks
from blockport.common.errors import BlockportError
from blockport.common.models import ParseOptions
from blockport.converters import BuilderOutput, ConversionMethod, OutputFormat
from blockport.dispatcher import (
    BuilderInfo,
    ConversionDispatcher,
    ExportResult,
    detect_builder_from_markup,
    dispatcher,
    export,
    export_to_multiple,
    get_available_builders,
    get_builder_info,
)

__all__ = [
    "BlockportError",
    "BuilderInfo",
    "BuilderOutput",
    "ContentBlock",
    "ConversionDispatcher",
    "ConversionMethod",
    "ElementSnapshot",
    "ExportResult",
    "OutputFormat",
    "ParseOptions",
    "count_blocks",
    "detect_builder_from_markup",
    "dispatcher",
    "export",
    "export_to_multiple",
    "get_available_builders",
    "get_builder_info",
    "has_block_markup",
    "parse_blocks",
]
