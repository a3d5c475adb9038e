"""Bricks: a flat element list linked by parent/children ids."""

from typing import Any

from blockport.common.utils.normalize import detect_video_provider
from blockport.converters.base import BuilderConverter, ConversionContext, OutputFormat
from blockport.converters.elementor import clean
from blockport.converters.markup import list_markup, table_markup, tag
from blockport.processor import BlockNode

# nested while walking, flattened in `assemble`
Element = dict[str, Any]

ROOT_PARENT = 0


def video_id(url: str, provider: str) -> str:
    tail = url.rstrip("/").split("/")[-1]
    if provider == "youtube" and "v=" in tail:
        return tail.split("v=", 1)[1].split("&", 1)[0]
    return tail


class BricksConverter(BuilderConverter[Element]):
    name = "bricks"
    display_name = "Bricks"
    output_format = OutputFormat.JSON
    description = "Visual site builder for WordPress"

    def element(self, ctx: ConversionContext, name: str, settings: dict[str, Any], children: list[Element] | None = None) -> Element:
        return {
            "id": ctx.ids.next_hex(6),
            "name": name,
            "settings": clean(settings),
            "children": children or [],
        }

    def container_settings(self, node: BlockNode) -> dict[str, Any]:
        padding = node.padding
        settings: dict[str, Any] = {
            "_background": clean(
                {"color": {"hex": node.background_color} if node.background_color else None, "image": {"url": node.url} if node.url else None}
            ),
        }
        if not padding.is_zero:
            settings["_padding"] = {side: padding.length(side) for side in padding.SIDES}
        return settings

    def typography(self, node: BlockNode) -> dict[str, Any]:
        return clean({"text-align": node.align, "color": {"hex": node.text_color} if node.text_color else None})

    def emit_heading(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.element(ctx, "heading", {"text": node.html, "tag": f"h{node.level}", "_typography": self.typography(node)})

    def emit_paragraph(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.element(ctx, "text-basic", {"text": node.html, "_typography": self.typography(node)})

    def emit_image(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.element(
            ctx,
            "image",
            {"image": {"url": node.url, "external": True}, "altText": node.alt, "caption": node.caption},
        )

    def emit_button(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.element(
            ctx,
            "button",
            {
                "text": node.text,
                "link": {"type": "external", "url": node.url or "#"},
                "style": "primary",
                "outline": node.is_outline,
                "_background": {"color": {"hex": node.background_color}} if node.background_color else None,
                "_typography": self.typography(node),
            },
        )

    def emit_list(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.element(ctx, "text", {"text": list_markup(node.items, node.ordered)})

    def emit_quote(self, node: BlockNode, ctx: ConversionContext) -> Element:
        cite = tag("cite", node.caption) if node.caption else ""
        return self.element(ctx, "text", {"text": tag("blockquote", node.html + cite)})

    def emit_video(self, node: BlockNode, ctx: ConversionContext) -> Element:
        provider = detect_video_provider(node.url)
        if provider == "hosted":
            settings = {"videoType": "file", "fileUrl": node.url}
        else:
            settings = {"videoType": provider, f"{provider}Id": video_id(node.url, provider)}
        return self.element(ctx, "video", settings)

    def emit_embed(self, node: BlockNode, ctx: ConversionContext) -> Element:
        if detect_video_provider(node.url) != "hosted":
            return self.emit_video(node, ctx)
        return self.element(ctx, "code", {"code": tag("iframe", src=node.url), "executeCode": True})

    def emit_separator(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.element(ctx, "divider", {"color": {"hex": node.background_color} if node.background_color else None})

    def emit_table(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.element(ctx, "code", {"code": table_markup(node.rows), "executeCode": True})

    def emit_raw(self, node: BlockNode, ctx: ConversionContext) -> Element:
        return self.element(ctx, "code", {"code": node.html, "executeCode": True})

    def emit_columns(self, node: BlockNode, children: list[Element], ctx: ConversionContext) -> Element:
        settings = {"_direction": "row", "_columnGap": "30px", **self.container_settings(node)}
        return self.element(ctx, "container", settings, children)

    def emit_column(self, node: BlockNode, children: list[Element], ctx: ConversionContext) -> Element:
        width = node.attributes.get("width") or f"{100 / max(ctx.sibling_count, 1):.4g}%"
        return self.element(ctx, "block", {"_width": str(width), **self.container_settings(node)}, children)

    def emit_group(self, node: BlockNode, children: list[Element], ctx: ConversionContext) -> Element:
        name = "section" if ctx.depth == 0 else "container"
        return self.element(ctx, name, self.container_settings(node), children)

    def wrap_top_level(self, node: BlockNode, output: Element, ctx: ConversionContext) -> Element:
        if output["name"] == "section":
            return output
        if output["name"] != "container":
            output = self.element(ctx, "container", {}, [output])
        return self.element(ctx, "section", {}, [output])

    def _flatten(self, element: Element, parent: str | int, flat: list[Element]) -> None:
        children: list[Element] = element["children"]
        flat.append(
            {
                "id": element["id"],
                "name": element["name"],
                "parent": parent,
                "children": [child["id"] for child in children],
                "settings": element["settings"],
            }
        )
        for child in children:
            self._flatten(child, element["id"], flat)

    def assemble(self, outputs: list[Element], ctx: ConversionContext) -> dict[str, Any]:
        flat: list[Element] = []
        for output in outputs:
            self._flatten(output, ROOT_PARENT, flat)
        return {
            "content": flat,
            "source": "bricksCopiedElements",
            "sourceUrl": "",
            "version": "1.9",
        }
