"""Small serializers shared by the HTML and shortcode targets."""

import json
from typing import Any, Mapping

from blockport.common.utils.normalize import escape_html

_SHORTCODE_ESCAPES = {"[": "&#91;", "]": "&#93;"}


def block_attrs_json(attributes: Mapping[str, Any]) -> str:
    """Compact JSON for a block comment; `--`, `<`, `>` and `&` are unicode-escaped."""
    encoded = json.dumps(dict(attributes), separators=(",", ":"), ensure_ascii=False)
    return (
        encoded.replace("--", "\\u002d\\u002d")
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def block_comment(name: str, attributes: Mapping[str, Any] | None = None, inner: str | None = None) -> str:
    """Serialize one block; `inner=None` gives the self-closing form."""
    if name.startswith("core/"):
        name = name[len("core/") :]
    attrs = f" {block_attrs_json(attributes)}" if attributes else ""
    if inner is None:
        return f"<!-- wp:{name}{attrs} /-->"
    return f"<!-- wp:{name}{attrs} -->\n{inner}\n<!-- /wp:{name} -->"


def html_attrs(attributes: Mapping[str, Any]) -> str:
    """` key="value"` pairs; empty and None values are skipped."""
    parts = []
    for key, value in attributes.items():
        if value is None or value == "" or value is False:
            continue
        if value is True:
            parts.append(f" {key}")
        else:
            parts.append(f' {key}="{escape_html(str(value))}"')
    return "".join(parts)


def style_attr(declarations: Mapping[str, str]) -> str:
    """Inline CSS from a property mapping, skipping empty values."""
    return ";".join(f"{prop}:{value}" for prop, value in declarations.items() if value)


def tag(name: str, inner: str = "", **attributes: Any) -> str:
    """`<name attrs>inner</name>`; trailing underscores in keywords are dropped (class_)."""
    attrs = html_attrs({key.rstrip("_").replace("_", "-"): value for key, value in attributes.items()})
    return f"<{name}{attrs}>{inner}</{name}>"


def void_tag(name: str, **attributes: Any) -> str:
    attrs = html_attrs({key.rstrip("_").replace("_", "-"): value for key, value in attributes.items()})
    return f"<{name}{attrs} />"


def shortcode_value(value: Any) -> str:
    text = escape_html("" if value is None else str(value))
    return "".join(_SHORTCODE_ESCAPES.get(char, char) for char in text)


def shortcode(name: str, attributes: Mapping[str, Any] | None = None, content: str = "") -> str:
    """`[name key="value"]content[/name]`; empty attribute values are skipped."""
    attrs = "".join(
        f' {key}="{shortcode_value(value)}"'
        for key, value in (attributes or {}).items()
        if value not in (None, "")
    )
    return f"[{name}{attrs}]{content}[/{name}]"


def list_markup(items: list[str], ordered: bool) -> str:
    list_tag = "ol" if ordered else "ul"
    return tag(list_tag, "".join(f"<li>{item}</li>" for item in items))


def table_markup(rows: list[list[str]]) -> str:
    if not rows:
        return "<table></table>"
    head, *body = rows
    thead = "<thead><tr>" + "".join(f"<th>{cell}</th>" for cell in head) + "</tr></thead>"
    tbody = "".join("<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>" for row in body)
    return f"<table>{thead}<tbody>{tbody}</tbody></table>"
