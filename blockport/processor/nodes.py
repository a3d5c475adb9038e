"""Map parsed blocks and element snapshots onto the closed BlockKind set."""

from bs4 import BeautifulSoup, Tag

from blockport.blocks.models import ContentBlock, ElementSnapshot
from blockport.blocks.parser import strip_block_markers
from blockport.common.utils.config import get_config
from blockport.common.utils.logger import get_logger
from blockport.common.utils.normalize import (
    escape_html,
    extract_background_image,
    extract_image_src,
    extract_link_href,
    first_tag,
    inner_html,
    strip_html,
)
from blockport.processor.models import BlockKind, BlockNode

logger = get_logger(__name__)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

CORE_KINDS: dict[str, BlockKind] = {
    "heading": BlockKind.HEADING,
    "paragraph": BlockKind.PARAGRAPH,
    "verse": BlockKind.PARAGRAPH,
    "preformatted": BlockKind.PARAGRAPH,
    "image": BlockKind.IMAGE,
    "button": BlockKind.BUTTON,
    "buttons": BlockKind.GROUP,
    "list": BlockKind.LIST,
    "quote": BlockKind.QUOTE,
    "pullquote": BlockKind.QUOTE,
    "video": BlockKind.VIDEO,
    "embed": BlockKind.EMBED,
    "columns": BlockKind.COLUMNS,
    "column": BlockKind.COLUMN,
    "group": BlockKind.GROUP,
    "cover": BlockKind.GROUP,
    "row": BlockKind.GROUP,
    "stack": BlockKind.GROUP,
    "separator": BlockKind.SEPARATOR,
    "table": BlockKind.TABLE,
    "html": BlockKind.RAW,
    "freeform": BlockKind.RAW,
    "shortcode": BlockKind.RAW,
}

NAMESPACED_KINDS: dict[str, BlockKind] = {
    "kadence/advancedheading": BlockKind.HEADING,
    "kadence/image": BlockKind.IMAGE,
    "kadence/advancedbtn": BlockKind.GROUP,
    "kadence/singlebtn": BlockKind.BUTTON,
    "kadence/rowlayout": BlockKind.COLUMNS,
    "kadence/column": BlockKind.COLUMN,
    "kadence/spacer": BlockKind.SEPARATOR,
}

ELEMENT_KINDS: dict[str, BlockKind] = {
    **{tag: BlockKind.HEADING for tag in HEADING_TAGS},
    "p": BlockKind.PARAGRAPH,
    "img": BlockKind.IMAGE,
    "button": BlockKind.BUTTON,
    "ul": BlockKind.LIST,
    "ol": BlockKind.LIST,
    "blockquote": BlockKind.QUOTE,
    "video": BlockKind.VIDEO,
    "iframe": BlockKind.EMBED,
    "hr": BlockKind.SEPARATOR,
    "table": BlockKind.TABLE,
}


def kind_for_block(block: ContentBlock) -> BlockKind:
    kind = NAMESPACED_KINDS.get(block.full_name)
    if kind is None and block.namespace == "core":
        kind = CORE_KINDS.get(block.name)
    if kind is None and block.namespace == "core-embed":
        kind = BlockKind.EMBED
    if kind is None:
        # unknown: keep the children if there are any, else pass the markup through
        kind = BlockKind.GROUP if block.children else BlockKind.RAW
        logger.debug("Unmapped block %s treated as %s", block.full_name, kind.value)
    return kind


def _heading_level(value: object, html: str) -> int:
    try:
        level = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        tag = first_tag(html, *HEADING_TAGS)
        level = int(tag.name[1]) if tag is not None else 2
    return min(max(level, 1), 6)


def _list_items(html: str) -> tuple[list[str], bool]:
    soup = BeautifulSoup(html, "html.parser")
    container = soup.find(["ul", "ol"])
    if not isinstance(container, Tag):
        return [], False
    items = [li.decode_contents().strip() for li in container.find_all("li", recursive=False)]
    return items, container.name == "ol"


def _table_rows(html: str) -> list[list[str]]:
    soup = BeautifulSoup(html, "html.parser")
    rows: list[list[str]] = []
    for tr in soup.find_all("tr"):
        cells = [cell.decode_contents().strip() for cell in tr.find_all(["th", "td"])]
        if cells:
            rows.append(cells)
    return rows


def _quote_parts(html: str) -> tuple[str, str]:
    soup = BeautifulSoup(html, "html.parser")
    cite = soup.find("cite")
    caption = ""
    if isinstance(cite, Tag):
        caption = cite.decode_contents().strip()
        cite.decompose()
    quote = soup.find("blockquote")
    body = quote.decode_contents() if isinstance(quote, Tag) else str(soup)
    return body.strip(), caption


def _media_src(html: str, *tags: str) -> str:
    tag = first_tag(html, *tags)
    if tag is None:
        return ""
    src = tag.get("src")
    if not src:
        source = tag.find("source")
        src = source.get("src") if isinstance(source, Tag) else ""
    return str(src or "")


def node_from_block(block: ContentBlock) -> BlockNode:
    """Convert a parsed block (and its subtree) into a BlockNode."""
    kind = kind_for_block(block)
    attributes = block.attributes
    children = [node_from_block(child) for child in block.children]
    content = strip_block_markers(block.raw_inner_content) if block.children else block.raw_inner_content
    fields: dict[str, object] = {}

    match kind:
        case BlockKind.HEADING:
            html = inner_html(content, *HEADING_TAGS) or str(attributes.get("content", ""))
            fields = {"html": html, "level": _heading_level(attributes.get("level"), content)}
        case BlockKind.PARAGRAPH:
            fields = {"html": inner_html(content, "p", "pre")}
        case BlockKind.IMAGE:
            img = first_tag(content, "img")
            caption = first_tag(content, "figcaption")
            fields = {
                "url": str(attributes.get("url") or extract_image_src(content)),
                "alt": str(attributes.get("alt") or (img.get("alt") if img is not None else "") or ""),
                "caption": caption.decode_contents().strip() if caption is not None else "",
            }
        case BlockKind.BUTTON:
            text = attributes.get("text")
            fields = {
                "url": str(attributes.get("url") or attributes.get("link") or extract_link_href(content)),
                "html": escape_html(str(text)) if text else inner_html(content, "a", "button"),
            }
        case BlockKind.LIST:
            items, ordered = _list_items(content)
            fields = {"items": items, "ordered": bool(attributes.get("ordered", ordered))}
        case BlockKind.QUOTE:
            body, caption = _quote_parts(content)
            fields = {"html": body, "caption": str(attributes.get("citation") or caption)}
        case BlockKind.VIDEO:
            fields = {"url": str(attributes.get("src") or _media_src(content, "video", "iframe"))}
        case BlockKind.EMBED:
            url = attributes.get("url") or _media_src(content, "iframe") or strip_html(content)
            fields = {"url": str(url)}
        case BlockKind.TABLE:
            fields = {"rows": _table_rows(content)}
        case BlockKind.RAW:
            fields = {"html": content}
        case BlockKind.GROUP:
            fields = {"url": str(attributes.get("url") or "")}
        case BlockKind.COLUMNS | BlockKind.COLUMN | BlockKind.SEPARATOR:
            pass

    html = str(fields.pop("html", ""))
    return BlockNode(
        kind=kind,
        name=block.full_name,
        attributes=attributes,
        html=html,
        text=strip_html(html) if html else "",
        children=children,
        **fields,  # type: ignore[arg-type]
    )


def is_button_like(element: ElementSnapshot) -> bool:
    if element.tag == "button":
        return True
    if element.tag != "a" and element.attributes.get("role") != "button":
        return False
    hints = get_config().button_class_hints
    return element.attributes.get("role") == "button" or any(
        hint in cls.lower() for cls in element.classes for hint in hints
    )


def kind_for_element(element: ElementSnapshot) -> BlockKind | None:
    """Kind for a content element, None for layout-only elements."""
    if is_button_like(element):
        return BlockKind.BUTTON
    kind = ELEMENT_KINDS.get(element.tag)
    if kind is None and not element.text.strip() and extract_background_image(element.style.get("background-image")):
        return BlockKind.IMAGE
    return kind


def node_from_element(element: ElementSnapshot) -> BlockNode:
    """Convert one rendered element into a leaf BlockNode."""
    kind = kind_for_element(element) or BlockKind.RAW
    text = " ".join(element.text.split())
    attributes: dict[str, str] = {}
    if element.attributes.get("class"):
        attributes["className"] = element.attributes["class"]
    fields: dict[str, object] = {}

    match kind:
        case BlockKind.HEADING:
            level = int(element.tag[1]) if element.tag in HEADING_TAGS else 2
            fields = {"level": level}
        case BlockKind.IMAGE:
            src = element.attributes.get("src") or extract_background_image(element.style.get("background-image"))
            fields = {"url": src, "alt": element.attributes.get("alt", "")}
        case BlockKind.BUTTON:
            fields = {"url": element.attributes.get("href", "")}
        case BlockKind.LIST:
            lines = [line.strip() for line in element.text.splitlines() if line.strip()]
            fields = {"items": [escape_html(line) for line in lines], "ordered": element.tag == "ol"}
        case BlockKind.VIDEO | BlockKind.EMBED:
            fields = {"url": element.attributes.get("src", "")}
        case BlockKind.TABLE:
            rows = [
                [escape_html(cell.strip()) for cell in line.split("\t")]
                for line in element.text.splitlines()
                if line.strip()
            ]
            fields = {"rows": rows}
        case _:
            pass

    return BlockNode(
        kind=kind,
        name=element.tag,
        attributes=attributes,
        style=element.style,
        html=escape_html(text),
        text=text,
        **fields,  # type: ignore[arg-type]
    )
