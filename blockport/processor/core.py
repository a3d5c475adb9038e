"""Rebuild a block tree from rendered element snapshots. Best-effort layout heuristics."""

from blockport.blocks.models import ElementSnapshot
from blockport.common.utils.config import get_config
from blockport.common.utils.logger import get_logger
from blockport.processor.filters import filter_elements
from blockport.processor.models import BlockKind, BlockNode
from blockport.processor.nodes import node_from_element

logger = get_logger(__name__)


def reading_order(elements: list[ElementSnapshot], tolerance: float | None = None) -> list[ElementSnapshot]:
    """Reorder elements by reading order (top-to-bottom, left-to-right)."""
    if tolerance is None:
        tolerance = get_config().reading_order_y_tolerance
    ordered = sorted(elements, key=lambda e: (e.box.y, e.box.x))
    result: list[ElementSnapshot] = []
    current_line: list[ElementSnapshot] = []
    last_y = None

    for element in ordered:
        y = element.box.y
        if last_y is None or abs(y - last_y) <= tolerance:
            current_line.append(element)
        else:
            result.extend(sorted(current_line, key=lambda e: e.box.x))
            current_line = [element]
        last_y = y

    if current_line:
        result.extend(sorted(current_line, key=lambda e: e.box.x))

    return result


def group_rows(elements: list[ElementSnapshot], tolerance: float | None = None) -> list[list[ElementSnapshot]]:
    """Bucket elements into horizontal rows.

    A row is anchored on its first (top-most) element; the next element starts a
    new row once its y is `tolerance` or more below that anchor. Rows come back
    sorted left to right.
    """
    if tolerance is None:
        tolerance = get_config().row_tolerance_px

    rows: list[list[ElementSnapshot]] = []
    anchor_y = 0.0
    for element in sorted(elements, key=lambda e: (e.box.y, e.box.x)):
        if not rows or abs(element.box.y - anchor_y) >= tolerance:
            rows.append([element])
            anchor_y = element.box.y
        else:
            rows[-1].append(element)

    return [sorted(row, key=lambda e: e.box.x) for row in rows]


def detect_columns(elements: list[ElementSnapshot], tolerance: float | None = None) -> list[list[ElementSnapshot]]:
    """Guess the page's column split from its widest row.

    The row with strictly the most members defines the columns (one per member).
    Ties, or a widest row of one, mean a single column with everything in it.
    """
    if not elements:
        return []

    rows = group_rows(elements, tolerance)
    widest = max(len(row) for row in rows)
    if widest < 2 or sum(1 for row in rows if len(row) == widest) > 1:
        return [list(elements)]

    row = next(row for row in rows if len(row) == widest)
    return [[element] for element in row]


def _split_side_by_side(row: list[ElementSnapshot]) -> list[list[ElementSnapshot]]:
    """Split a row into columns; horizontally overlapping elements are stacked, not side by side."""
    columns: list[list[ElementSnapshot]] = []
    right_edge = float("-inf")
    for element in sorted(row, key=lambda e: e.box.x):
        x0, _, x1, _ = element.box.bbox
        if columns and x0 < right_edge:
            columns[-1].append(element)
            right_edge = max(right_edge, x1)
        else:
            columns.append([element])
            right_edge = x1
    return [reading_order(column) for column in columns]


def snapshot_to_nodes(elements: list[ElementSnapshot]) -> list[BlockNode]:
    """Build a substitute block tree from element snapshots.

    Rows with several side-by-side elements become a columns node holding one
    column per element group; everything else becomes a top-level leaf.
    """
    candidates = list(elements)
    filter_elements(candidates)
    logger.debug("%d of %d snapshot elements survive filtering", len(candidates), len(elements))

    nodes: list[BlockNode] = []
    for row in group_rows(candidates):
        columns = _split_side_by_side(row)
        if len(columns) == 1:
            nodes.extend(node_from_element(element) for element in columns[0])
            continue
        nodes.append(
            BlockNode(
                kind=BlockKind.COLUMNS,
                name="row",
                children=[
                    BlockNode(
                        kind=BlockKind.COLUMN,
                        name="column",
                        children=[node_from_element(element) for element in column],
                    )
                    for column in columns
                ],
            )
        )

    return nodes
