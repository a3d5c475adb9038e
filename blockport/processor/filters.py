"""Filters applied to element snapshots before layout reconstruction."""

from typing import Callable

from blockport.blocks.models import ElementSnapshot
from blockport.common.utils.config import get_config
from blockport.common.utils.logger import get_logger
from blockport.processor.models import BlockKind
from blockport.processor.nodes import kind_for_element

logger = get_logger(__name__)

# content inside these is rendered by the element itself
ABSORBING_TAGS = {"ul", "ol", "blockquote", "table", "button"}

CONTAINMENT_SLACK_PX = 1.0


def is_visible(element: ElementSnapshot) -> bool:
    """Rendered with a real size and not hidden by CSS."""
    if not element.visible or element.box.is_empty:
        return False
    style = element.style
    if style.get("display", "").strip().lower() == "none":
        return False
    if style.get("visibility", "").strip().lower() == "hidden":
        return False
    try:
        if float(style.get("opacity", "1") or 1) == 0:
            return False
    except ValueError:
        pass  # unparsable opacity counts as opaque
    return True


def filter_visible(elements: list[ElementSnapshot]) -> list[ElementSnapshot]:
    """Keep only visible elements, preserving order."""
    return [element for element in elements if is_visible(element)]


def remove_hidden(elements: list[ElementSnapshot]) -> None:
    elements[:] = filter_visible(elements)


def cap_elements(elements: list[ElementSnapshot]) -> None:
    """Keep at most `max_elements` elements."""
    limit = get_config().max_elements
    if len(elements) > limit:
        logger.debug("Capping %d elements at %d", len(elements), limit)
        del elements[limit:]


def remove_skipped_tags(elements: list[ElementSnapshot]) -> None:
    skip = set(get_config().skip_tags)
    elements[:] = [element for element in elements if element.tag not in skip]


def keep_content_elements(elements: list[ElementSnapshot]) -> None:
    """Drop layout-only wrappers (div, span, section, ...)."""
    elements[:] = [element for element in elements if kind_for_element(element) is not None]


def _contains(outer: ElementSnapshot, inner: ElementSnapshot) -> bool:
    ox0, oy0, ox1, oy1 = outer.box.bbox
    ix0, iy0, ix1, iy1 = inner.box.bbox
    slack = CONTAINMENT_SLACK_PX
    return ix0 >= ox0 - slack and iy0 >= oy0 - slack and ix1 <= ox1 + slack and iy1 <= oy1 + slack


def remove_absorbed(elements: list[ElementSnapshot]) -> None:
    """Drop elements drawn inside a list, quote, table or button seen before them."""
    absorbing: list[ElementSnapshot] = []
    kept: list[ElementSnapshot] = []
    for element in elements:
        if any(_contains(outer, element) for outer in absorbing):
            continue
        if element.tag in ABSORBING_TAGS or kind_for_element(element) is BlockKind.BUTTON:
            absorbing.append(element)
        kept.append(element)
    elements[:] = kept


def remove_duplicate_images(elements: list[ElementSnapshot]) -> None:
    """Remove repeated images based on src, keeping the first occurrence."""
    seen_srcs: set[str] = set()
    kept: list[ElementSnapshot] = []

    for element in elements:
        if element.tag == "img":
            src = element.attributes.get("src", "")
            if src and src in seen_srcs:
                logger.debug("Skipping duplicate image: %s", src)
                continue
            seen_srcs.add(src)
        kept.append(element)

    elements[:] = kept


filters: list[Callable[[list[ElementSnapshot]], None]] = [
    remove_hidden,
    cap_elements,
    remove_skipped_tags,
    keep_content_elements,
    remove_absorbed,
    remove_duplicate_images,
]


def filter_elements(elements: list[ElementSnapshot]) -> None:
    """Apply every snapshot filter, in order, in place."""
    for ffilter in filters:
        ffilter(elements)
