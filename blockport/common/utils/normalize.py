"""Value normalization shared by every converter.

Colors, alignment, spacing shorthand and HTML escaping must come out the same
no matter which builder is targeted, so converters never do this themselves.
"""

import re
from typing import Any, Mapping

from bs4 import BeautifulSoup, Tag

from blockport.common.models import Spacing
from blockport.common.utils.config import get_config
from blockport.common.utils.logger import get_logger

logger = get_logger(__name__)

_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3}(?:\.\d+)?)\s*[,\s]\s*(\d{1,3}(?:\.\d+)?)\s*[,\s]\s*(\d{1,3}(?:\.\d+)?)"
    r"(?:\s*[,/]\s*([\d.]+%?))?\s*\)$",
    re.IGNORECASE,
)
_LENGTH_RE = re.compile(r"^(-?\d*\.?\d+)([a-z%]*)$", re.IGNORECASE)
_URL_RE = re.compile(r"url\(\s*(['\"]?)(.*?)\1\s*\)", re.IGNORECASE)

# rgba(0,0,0,0) is how computed style spells "transparent"
_NO_COLOR = {"", "transparent", "inherit", "rgba(0,0,0,0)"}
_TEXT_ALIGNMENTS = {"left", "center", "right", "justify"}
_CSS_ALIGN_ALIASES = {"start": "left", "end": "right", "-webkit-center": "center", "-moz-center": "center"}

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}


def parse_color(value: str | None) -> str:
    """Normalize a CSS color to upper-case hex; "" means no color."""
    if value is None:
        return ""
    color = str(value).strip()
    if re.sub(r"\s+", "", color.lower()) in _NO_COLOR:
        return ""
    if color.startswith("#"):
        return color.upper()

    match = _RGB_RE.match(color)
    if match:
        # alpha is dropped
        channels = (min(255, round(float(c))) for c in match.groups()[:3])
        return "#" + "".join(f"{c:02X}" for c in channels)

    return color


def resolve_alignment(
    attributes: Mapping[str, Any] | None = None,
    style: Mapping[str, str] | None = None,
    default: str | None = None,
) -> str:
    """Explicit block attribute > computed text-align > configured default."""
    attributes = attributes or {}
    for key in ("textAlign", "align"):
        value = str(attributes.get(key) or "").lower()
        if value in _TEXT_ALIGNMENTS:
            return value

    css_value = str((style or {}).get("text-align") or "").strip().lower()
    css_value = _CSS_ALIGN_ALIASES.get(css_value, css_value)
    if css_value in _TEXT_ALIGNMENTS:
        return css_value

    return default or get_config().default_alignment


def _split_length(token: str) -> tuple[str, str]:
    match = _LENGTH_RE.match(token.strip())
    if not match:
        logger.debug("Unparsable spacing value %r, using 0", token)
        return "0", ""
    number, unit = match.groups()
    if number.endswith(".0"):
        number = number[:-2]
    return number, unit.lower()


def expand_spacing(value: str | Mapping[str, Any] | int | float | None, default_unit: str = "px") -> Spacing:
    """Expand CSS 1/2/3/4-value shorthand (or a per-side mapping) into a Spacing."""
    if value is None or value == "":
        return Spacing(units=(default_unit,) * 4)

    if isinstance(value, Mapping):
        raw_sides = [str(value.get(side, 0) or 0) for side in ("top", "right", "bottom", "left")]
    else:
        parts = str(value).split()
        match len(parts):
            case 1:
                raw_sides = parts * 4
            case 2:
                raw_sides = [parts[0], parts[1], parts[0], parts[1]]
            case 3:
                raw_sides = [parts[0], parts[1], parts[2], parts[1]]
            case _:
                raw_sides = parts[:4]

    lengths = [_split_length(raw) for raw in raw_sides]
    # a unitless side borrows the first explicit unit, else the default
    fallback = next((unit for number, unit in lengths if unit and number != "0"), default_unit)
    (top, _), (right, _), (bottom, _), (left, _) = lengths
    units = tuple(unit or fallback for _, unit in lengths)
    return Spacing(top=top, right=right, bottom=bottom, left=left, units=units)


def escape_html(text: str | None) -> str:
    """Escape the five HTML-special characters."""
    if not text:
        return ""
    return "".join(_HTML_ESCAPES.get(char, char) for char in str(text))


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def strip_html(html: str | None) -> str:
    """Plain text of an HTML fragment, whitespace collapsed."""
    if not html:
        return ""
    return " ".join(_soup(html).get_text().split())


def first_tag(html: str | None, *names: str) -> Tag | None:
    if not html:
        return None
    found = _soup(html).find(list(names) if names else True)
    return found if isinstance(found, Tag) else None


def inner_html(html: str | None, *names: str) -> str:
    """Inner markup of the first matching tag, or the whole fragment if none matches."""
    if not html:
        return ""
    tag = first_tag(html, *names)
    if tag is None:
        return html.strip()
    return tag.decode_contents().strip()


def extract_image_src(html: str | None) -> str:
    tag = first_tag(html, "img")
    if tag is None:
        return ""
    return str(tag.get("src") or "")


def extract_link_href(html: str | None) -> str:
    tag = first_tag(html, "a")
    if tag is None:
        return ""
    return str(tag.get("href") or "")


def extract_background_image(css: str | None) -> str:
    """URL out of a `background-image: url(...)` value."""
    if not css:
        return ""
    match = _URL_RE.search(css)
    return match.group(2).strip() if match else ""


def detect_video_provider(url: str | None) -> str:
    """youtube, vimeo, or hosted (a plain video file or anything else)."""
    lowered = (url or "").lower()
    if "youtube.com" in lowered or "youtu.be" in lowered:
        return "youtube"
    if "vimeo.com" in lowered:
        return "vimeo"
    return "hosted"
