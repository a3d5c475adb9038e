"""Converter contract and the one tree walker every builder shares.

A converter only says how each kind of node looks in its target; the walk,
the counting, the timing and the id bookkeeping live here.
"""

import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, ClassVar, Generic, Literal, TypeVar, assert_never

from pydantic import BaseModel, ConfigDict, Field

from blockport.blocks.models import ContentBlock, ElementSnapshot
from blockport.common.errors import ConversionError
from blockport.common.utils.logger import get_logger
from blockport.processor import BlockKind, BlockNode, node_from_block, snapshot_to_nodes

logger = get_logger(__name__)

T = TypeVar("T")


class OutputFormat(Enum):
    JSON = "json"
    HTML = "html"
    SHORTCODE = "shortcode"


class ConversionMethod(Enum):
    NATIVE = "native"  # from parsed block markup
    FALLBACK = "fallback"  # rebuilt from element snapshots


class OutputMetadata(BaseModel):
    widget_count: int  # every node visited, containers included
    section_count: int  # top-level input nodes
    conversion_method: ConversionMethod
    build_time_ms: float = 0.0

    model_config = ConfigDict(frozen=True)


class BuilderOutput(BaseModel):
    format: OutputFormat
    content: str | dict[str, Any]
    metadata: OutputMetadata

    model_config = ConfigDict(frozen=True)


class TreeInput(BaseModel):
    kind: Literal["tree"] = "tree"
    blocks: list[ContentBlock]


class SnapshotInput(BaseModel):
    kind: Literal["snapshot"] = "snapshot"
    elements: list[ElementSnapshot]


ConversionInput = Annotated[TreeInput | SnapshotInput, Field(discriminator="kind")]


class IdSequence:
    """Deterministic ids, fresh for every conversion call."""

    def __init__(self, start: int = 1):
        self._next = start

    def next_int(self) -> int:
        value = self._next
        self._next += 1
        return value

    def next_hex(self, width: int = 7) -> str:
        return format(self.next_int(), f"0{width}x")


@dataclass
class Position:
    kind: BlockKind
    index: int  # among siblings
    sibling_count: int


@dataclass
class ConversionContext:
    """Per-call walk state: ids, visit count and the ancestry of the current node."""

    ids: IdSequence = field(default_factory=IdSequence)
    visited: int = 0
    path: list[Position] = field(default_factory=list)

    @property
    def depth(self) -> int:
        """0 for top-level nodes."""
        return len(self.path) - 1

    @property
    def parent_kind(self) -> BlockKind | None:
        return self.path[-2].kind if len(self.path) > 1 else None

    @property
    def sibling_count(self) -> int:
        return self.path[-1].sibling_count if self.path else 0

    @property
    def index(self) -> int:
        return self.path[-1].index if self.path else 0

    def inside(self, *kinds: BlockKind) -> bool:
        """Whether any ancestor of the current node has one of these kinds."""
        return any(position.kind in kinds for position in self.path[:-1])


def count_nodes(nodes: list[BlockNode]) -> int:
    return sum(1 + count_nodes(node.children) for node in nodes)


class BuilderConverter(ABC, Generic[T]):
    """Base class for all builder converters.

    Subclasses declare their registry metadata as class variables and implement
    one `emit_*` method per BlockKind. Container emitters receive their already
    converted children. `assemble` turns the top-level outputs into the final
    document.
    """

    name: ClassVar[str]
    display_name: ClassVar[str]
    output_format: ClassVar[OutputFormat]
    description: ClassVar[str]
    aliases: ClassVar[tuple[str, ...]] = ()

    def convert(self, data: TreeInput | SnapshotInput) -> BuilderOutput:
        match data:
            case TreeInput(blocks=blocks):
                return self.convert_from_tree(blocks)
            case SnapshotInput(elements=elements):
                return self.convert_from_snapshot(elements)
            case _:
                assert_never(data)

    def convert_from_tree(self, blocks: list[ContentBlock]) -> BuilderOutput:
        started = time.perf_counter()
        nodes = [node_from_block(block) for block in blocks]
        return self._render(nodes, ConversionMethod.NATIVE, started)

    def convert_from_snapshot(self, elements: list[ElementSnapshot]) -> BuilderOutput:
        started = time.perf_counter()
        nodes = snapshot_to_nodes(elements)
        return self._render(nodes, ConversionMethod.FALLBACK, started)

    def _render(self, nodes: list[BlockNode], method: ConversionMethod, started: float) -> BuilderOutput:
        ctx = ConversionContext()
        outputs = [self._visit(node, ctx, index, len(nodes)) for index, node in enumerate(nodes)]
        content = self.assemble(outputs, ctx)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.debug("%s: %d nodes, %d top-level, %.2fms", self.name, ctx.visited, len(nodes), elapsed_ms)
        return BuilderOutput(
            format=self.output_format,
            content=content,
            metadata=OutputMetadata(
                widget_count=ctx.visited,
                section_count=len(nodes),
                conversion_method=method,
                build_time_ms=round(elapsed_ms, 3),
            ),
        )

    def _visit(self, node: BlockNode, ctx: ConversionContext, index: int, sibling_count: int) -> T:
        ctx.visited += 1
        ctx.path.append(Position(node.kind, index, sibling_count))
        try:
            if node.kind.is_container:
                children = [
                    self._visit(child, ctx, child_index, len(node.children))
                    for child_index, child in enumerate(node.children)
                ]
            else:
                # a leaf renders its inner blocks itself; they still count as visited
                ctx.visited += count_nodes(node.children)
                children = []

            try:
                output = self._emit(node, children, ctx)
            except Exception as e:
                raise ConversionError(f"{self.name} could not emit a {node.kind.value} node: {e}") from e
            if ctx.depth == 0:
                output = self.wrap_top_level(node, output, ctx)
            return output
        finally:
            ctx.path.pop()

    def _emit(self, node: BlockNode, children: list[T], ctx: ConversionContext) -> T:
        match node.kind:
            case BlockKind.HEADING:
                return self.emit_heading(node, ctx)
            case BlockKind.PARAGRAPH:
                return self.emit_paragraph(node, ctx)
            case BlockKind.IMAGE:
                return self.emit_image(node, ctx)
            case BlockKind.BUTTON:
                return self.emit_button(node, ctx)
            case BlockKind.LIST:
                return self.emit_list(node, ctx)
            case BlockKind.QUOTE:
                return self.emit_quote(node, ctx)
            case BlockKind.VIDEO:
                return self.emit_video(node, ctx)
            case BlockKind.EMBED:
                return self.emit_embed(node, ctx)
            case BlockKind.SEPARATOR:
                return self.emit_separator(node, ctx)
            case BlockKind.TABLE:
                return self.emit_table(node, ctx)
            case BlockKind.RAW:
                return self.emit_raw(node, ctx)
            case BlockKind.COLUMNS:
                return self.emit_columns(node, children, ctx)
            case BlockKind.COLUMN:
                return self.emit_column(node, children, ctx)
            case BlockKind.GROUP:
                return self.emit_group(node, children, ctx)
            case _:
                assert_never(node.kind)

    def wrap_top_level(self, node: BlockNode, output: T, ctx: ConversionContext) -> T:
        """Hook for targets that need a section around every top-level item."""
        return output

    def column_percent(self, node: BlockNode, ctx: ConversionContext) -> float:
        """A column's "NN%" width, or an even share of its row when that is missing or malformed."""
        even = 100 / max(ctx.sibling_count, 1)
        width = node.attributes.get("width")
        if not isinstance(width, str) or not width.endswith("%"):
            return even
        try:
            percent = float(width[:-1])
        except ValueError:
            return even
        return percent if math.isfinite(percent) and 0 < percent <= 100 else even

    @abstractmethod
    def emit_heading(self, node: BlockNode, ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_paragraph(self, node: BlockNode, ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_image(self, node: BlockNode, ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_button(self, node: BlockNode, ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_list(self, node: BlockNode, ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_quote(self, node: BlockNode, ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_video(self, node: BlockNode, ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_embed(self, node: BlockNode, ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_separator(self, node: BlockNode, ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_table(self, node: BlockNode, ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_raw(self, node: BlockNode, ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_columns(self, node: BlockNode, children: list[T], ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_column(self, node: BlockNode, children: list[T], ctx: ConversionContext) -> T: ...

    @abstractmethod
    def emit_group(self, node: BlockNode, children: list[T], ctx: ConversionContext) -> T: ...

    @abstractmethod
    def assemble(self, outputs: list[T], ctx: ConversionContext) -> str | dict[str, Any]: ...
