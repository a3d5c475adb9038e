"""Kind-tagged node tree every converter walks."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from blockport.common.models import Spacing
from blockport.common.utils.normalize import expand_spacing, parse_color, resolve_alignment


class BlockKind(Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    IMAGE = "image"
    BUTTON = "button"
    LIST = "list"
    QUOTE = "quote"
    VIDEO = "video"
    EMBED = "embed"
    COLUMNS = "columns"
    COLUMN = "column"
    GROUP = "group"
    SEPARATOR = "separator"
    TABLE = "table"
    RAW = "raw"  # passthrough HTML/text for anything unrecognized

    @property
    def is_container(self) -> bool:
        return self in (BlockKind.COLUMNS, BlockKind.COLUMN, BlockKind.GROUP)


class BlockNode(BaseModel):
    """A normalized block, whatever it came from (markup or snapshot)."""

    kind: BlockKind
    name: str = ""  # source block name or tag, for diagnostics
    attributes: dict[str, Any] = Field(default_factory=dict)
    style: dict[str, str] = Field(default_factory=dict)
    html: str = ""  # inner markup, safe to embed in HTML output
    text: str = ""  # plain text
    level: int = 2  # heading level
    url: str = ""  # image src, button/link href, video/embed url, background image
    alt: str = ""
    caption: str = ""
    items: list[str] = Field(default_factory=list)  # list item markup
    ordered: bool = False
    rows: list[list[str]] = Field(default_factory=list)  # table cells
    children: list["BlockNode"] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def align(self) -> str:
        return resolve_alignment(self.attributes, self.style)

    @property
    def text_color(self) -> str:
        explicit = self.attributes.get("textColorValue") or _nested(self.attributes, "style", "color", "text")
        return parse_color(explicit or self.style.get("color"))

    @property
    def background_color(self) -> str:
        explicit = self.attributes.get("backgroundColorValue") or _nested(
            self.attributes, "style", "color", "background"
        )
        return parse_color(explicit or self.style.get("background-color"))

    @property
    def padding(self) -> Spacing:
        explicit = _nested(self.attributes, "style", "spacing", "padding")
        return expand_spacing(explicit or self.style.get("padding"))

    @property
    def is_outline(self) -> bool:
        return "is-style-outline" in str(self.attributes.get("className", ""))


def _nested(data: dict[str, Any], *keys: str) -> Any:
    current: Any = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current
