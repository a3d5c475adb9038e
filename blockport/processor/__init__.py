"""Turn parsed blocks or rendered snapshots into one kind-tagged node tree."""

from blockport.processor.core import detect_columns, group_rows, reading_order, snapshot_to_nodes
from blockport.processor.filters import filter_visible
from blockport.processor.models import BlockKind, BlockNode
from blockport.processor.nodes import node_from_block, node_from_element

__all__ = [
    "BlockKind",
    "BlockNode",
    "detect_columns",
    "filter_visible",
    "group_rows",
    "node_from_block",
    "node_from_element",
    "reading_order",
    "snapshot_to_nodes",
]
