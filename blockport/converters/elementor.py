"""Elementor: section > column > widget JSON."""

from typing import Any

from blockport.common.models import Spacing
from blockport.common.utils.normalize import detect_video_provider
from blockport.converters.base import BuilderConverter, ConversionContext, OutputFormat
from blockport.converters.markup import list_markup, table_markup, tag
from blockport.processor import BlockKind, BlockNode

Element = dict[str, Any]

TEMPLATE_VERSION = "3.0.0"


def clean(settings: dict[str, Any]) -> dict[str, Any]:
    """Drop unset values so the JSON only carries what the source had."""
    return {key: value for key, value in settings.items() if value not in (None, "", {}, [])}


def dimensions(spacing: Spacing) -> dict[str, Any]:
    if spacing.is_zero:
        return {}
    if spacing.is_mixed:
        # one unit per control, so mixed sides go in as custom lengths
        sides = {side: spacing.length(side) for side in Spacing.SIDES}
        return {"unit": "custom", **sides, "isLinked": len(set(sides.values())) == 1}
    return {
        "unit": spacing.unit,
        "top": spacing.top,
        "right": spacing.right,
        "bottom": spacing.bottom,
        "left": spacing.left,
        "isLinked": len({spacing.top, spacing.right, spacing.bottom, spacing.left}) == 1,
    }


class ElementorConverter(BuilderConverter[Element]):
    name = "elementor"
    display_name = "Elementor"
    output_format = OutputFormat.JSON
    description = "Most popular drag-and-drop page builder"

    section_type = "section"

    def widget(self, ctx: ConversionContext, widget_type: str, settings: dict[str, Any]) -> Element:
        return {
            "id": ctx.ids.next_hex(),
            "elType": "widget",
            "widgetType": widget_type,
            "settings": clean(settings),
            "elements": [],
        }

    def column(self, ctx: ConversionContext, size: int, elements: list[Element], settings: dict[str, Any] | None = None) -> Element:
        return {
            "id": ctx.ids.next_hex(),
            "elType": "column",
            "settings": clean({"_column_size": size, **(settings or {})}),
            "elements": elements,
        }

    def section(self, ctx: ConversionContext, columns: list[Element], settings: dict[str, Any], inner: bool = False) -> Element:
        return {
            "id": ctx.ids.next_hex(),
            "elType": self.section_type,
            "isInner": inner,
            "settings": clean(settings),
            "elements": columns,
        }

    def container_settings(self, node: BlockNode) -> dict[str, Any]:
        settings: dict[str, Any] = {
            "background_color": node.background_color,
            "padding": dimensions(node.padding),
        }
        if node.url:
            settings["background_background"] = "classic"
            settings["background_image"] = {"url": node.url}
        return settings

    def emit_heading(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.widget(
            ctx,
            "heading",
            {
                "title": node.html,
                "header_size": f"h{node.level}",
                "align": node.align,
                "title_color": node.text_color,
            },
        )

    def emit_paragraph(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.widget(
            ctx,
            "text-editor",
            {"editor": f"<p>{node.html}</p>", "align": node.align, "text_color": node.text_color},
        )

    def emit_image(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.widget(
            ctx,
            "image",
            {
                "image": clean({"url": node.url, "id": node.attributes.get("id"), "alt": node.alt}),
                "image_size": node.attributes.get("sizeSlug") or "full",
                "caption": node.caption,
                "align": node.align,
            },
        )

    def emit_button(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.widget(
            ctx,
            "button",
            {
                "text": node.text,
                "link": {"url": node.url or "#"},
                "align": node.align,
                "button_type": "outline" if node.is_outline else "",
                "background_color": node.background_color,
                "button_text_color": node.text_color,
            },
        )

    def emit_list(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.widget(ctx, "text-editor", {"editor": list_markup(node.items, node.ordered)})

    def emit_quote(self, node: BlockNode, ctx: ConversionContext) -> Element:
        cite = tag("cite", node.caption) if node.caption else ""
        return self.widget(ctx, "text-editor", {"editor": tag("blockquote", node.html + cite)})

    def emit_video(self, node: BlockNode, ctx: ConversionContext) -> Element:
        provider = detect_video_provider(node.url)
        settings: dict[str, Any] = {"video_type": provider, "controls": "yes"}
        if provider == "hosted":
            settings["hosted_url"] = {"url": node.url}
        else:
            settings[f"{provider}_url"] = node.url
        if node.attributes.get("autoplay"):
            settings["autoplay"] = "yes"
        return self.widget(ctx, "video", settings)

    def emit_embed(self, node: BlockNode, ctx: ConversionContext) -> Element:
        if detect_video_provider(node.url) != "hosted":
            return self.emit_video(node, ctx)
        return self.widget(ctx, "html", {"html": tag("iframe", src=node.url, loading="lazy")})

    def emit_separator(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.widget(ctx, "divider", {"color": node.background_color or node.text_color})

    def emit_table(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.widget(ctx, "html", {"html": table_markup(node.rows)})

    def emit_raw(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.widget(ctx, "html", {"html": node.html})

    def _as_column(self, element: Element, ctx: ConversionContext, size: int) -> Element:
        if element["elType"] == "column":
            return element
        return self.column(ctx, size, [element])

    def emit_columns(self, node: BlockNode, children: list[Element], ctx: ConversionContext) -> Element:
        size = round(100 / max(len(children), 1))
        columns = [self._as_column(child, ctx, size) for child in children]
        settings = {"structure": f"{len(columns)}0" if len(columns) > 1 else "", **self.container_settings(node)}
        return self.section(ctx, columns, settings, inner=ctx.inside(BlockKind.COLUMN))

    def emit_column(self, node: BlockNode, children: list[Element], ctx: ConversionContext) -> Element:
        size = round(self.column_percent(node, ctx))
        elements = [self._inner(child) for child in children]
        return self.column(ctx, size, elements, {"background_color": node.background_color})

    def _inner(self, element: Element) -> Element:
        # sections nested in a column are inner sections
        if element["elType"] == self.section_type:
            element["isInner"] = True
        return element

    def emit_group(self, node: BlockNode, children: list[Element], ctx: ConversionContext) -> Element:
        elements = [self._inner(child) for child in children]
        column = self.column(ctx, 100, elements)
        return self.section(ctx, [column], self.container_settings(node), inner=ctx.depth > 0)

    def wrap_top_level(self, node: BlockNode, output: Element, ctx: ConversionContext) -> Element:
        match output["elType"]:
            case "widget":
                return self.section(ctx, [self.column(ctx, 100, [output])], {"layout": "boxed"})
            case "column":
                return self.section(ctx, [output], {"layout": "boxed"})
            case _:
                return output

    def assemble(self, outputs: list[Element], ctx: ConversionContext) -> dict[str, Any]:
        return {
            "version": TEMPLATE_VERSION,
            "title": "Imported Template",
            "type": "page",
            "content": outputs,
        }
