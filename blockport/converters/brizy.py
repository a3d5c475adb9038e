"""Brizy: Section > Row > Column JSON, every leaf inside a Wrapper."""

from typing import Any

from blockport.common.utils.normalize import detect_video_provider
from blockport.converters.base import BuilderConverter, ConversionContext, OutputFormat
from blockport.converters.elementor import clean
from blockport.converters.markup import list_markup, table_markup, tag
from blockport.processor import BlockNode

Item = dict[str, Any]


class BrizyConverter(BuilderConverter[Item]):
    name = "brizy"
    display_name = "Brizy"
    output_format = OutputFormat.JSON
    description = "Next-gen website builder"

    def item(self, ctx: ConversionContext, item_type: str, value: dict[str, Any], items: list[Item] | None = None) -> Item:
        body = {"_id": ctx.ids.next_hex(8), **clean(value)}
        if items is not None:
            body["items"] = items
        return {"type": item_type, "value": body}

    def wrapped(self, ctx: ConversionContext, item_type: str, value: dict[str, Any]) -> Item:
        return self.item(ctx, "Wrapper", {"_styles": ["wrapper", f"wrapper--{item_type.lower()}"]}, [self.item(ctx, item_type, value)])

    def rich_text(self, ctx: ConversionContext, node: BlockNode, html: str) -> Item:
        return self.wrapped(ctx, "RichText", {"_styles": ["richText"], "text": html, "horizontalAlign": node.align, "colorHex": node.text_color})

    def emit_heading(self, node: BlockNode, ctx: ConversionContext) -> Item:
        return self.rich_text(ctx, node, tag(f"h{node.level}", node.html))

    def emit_paragraph(self, node: BlockNode, ctx: ConversionContext) -> Item:
        return self.rich_text(ctx, node, tag("p", node.html))

    def emit_image(self, node: BlockNode, ctx: ConversionContext) -> Item:
        return self.wrapped(ctx, "Image", {"_styles": ["image"], "imageSrc": node.url, "alt": node.alt, "horizontalAlign": node.align})

    def emit_button(self, node: BlockNode, ctx: ConversionContext) -> Item:
        value = {
            "_styles": ["button"],
            "text": node.text,
            "linkType": "external",
            "linkExternal": node.url or "#",
            "fillType": "outline" if node.is_outline else "filled",
            "bgColorHex": node.background_color,
            "colorHex": node.text_color,
        }
        item = self.item(ctx, "Button", value)
        return self.item(ctx, "Cloneable", {"_styles": ["wrapper-clone", "wrapper-clone--button"], "horizontalAlign": node.align}, [item])

    def emit_list(self, node: BlockNode, ctx: ConversionContext) -> Item:
        return self.rich_text(ctx, node, list_markup(node.items, node.ordered))

    def emit_quote(self, node: BlockNode, ctx: ConversionContext) -> Item:
        cite = tag("cite", node.caption) if node.caption else ""
        return self.rich_text(ctx, node, tag("blockquote", node.html + cite))

    def emit_video(self, node: BlockNode, ctx: ConversionContext) -> Item:
        provider = detect_video_provider(node.url)
        value = {"_styles": ["video"], "type": "custom" if provider == "hosted" else provider, "video": node.url}
        return self.wrapped(ctx, "Video", value)

    def emit_embed(self, node: BlockNode, ctx: ConversionContext) -> Item:
        if detect_video_provider(node.url) != "hosted":
            return self.emit_video(node, ctx)
        return self.wrapped(ctx, "EmbedCode", {"_styles": ["embedCode"], "code": tag("iframe", src=node.url)})

    def emit_separator(self, node: BlockNode, ctx: ConversionContext) -> Item:
        return self.wrapped(ctx, "Line", {"_styles": ["line"], "borderColorHex": node.background_color or node.text_color})

    def emit_table(self, node: BlockNode, ctx: ConversionContext) -> Item:
        return self.wrapped(ctx, "EmbedCode", {"_styles": ["embedCode"], "code": table_markup(node.rows)})

    def emit_raw(self, node: BlockNode, ctx: ConversionContext) -> Item:
        return self.wrapped(ctx, "EmbedCode", {"_styles": ["embedCode"], "code": node.html})

    def background(self, node: BlockNode) -> dict[str, Any]:
        padding = node.padding
        value: dict[str, Any] = {"bgColorHex": node.background_color, "bgImageSrc": node.url}
        if not padding.is_zero:
            for side, unit in zip(padding.SIDES, padding.units):
                value[f"padding{side.title()}"] = getattr(padding, side)
                value[f"padding{side.title()}Suffix"] = unit
        return value

    def column(self, ctx: ConversionContext, width: float, items: list[Item], value: dict[str, Any] | None = None) -> Item:
        return self.item(ctx, "Column", {"_styles": ["column"], "width": round(width, 1), **(value or {})}, items)

    def row(self, ctx: ConversionContext, columns: list[Item], value: dict[str, Any] | None = None) -> Item:
        return self.item(ctx, "Row", {"_styles": ["row", "hide-row-borders", "padding-0"], **(value or {})}, columns)

    def section(self, ctx: ConversionContext, items: list[Item], value: dict[str, Any] | None = None) -> Item:
        section_item = self.item(ctx, "SectionItem", {"_styles": ["section-item"], **(value or {})}, items)
        return self.item(ctx, "Section", {"_styles": ["section"]}, [section_item])

    def emit_columns(self, node: BlockNode, children: list[Item], ctx: ConversionContext) -> Item:
        return self.row(ctx, children, self.background(node))

    def emit_column(self, node: BlockNode, children: list[Item], ctx: ConversionContext) -> Item:
        return self.column(ctx, self.column_percent(node, ctx), children, self.background(node))

    def emit_group(self, node: BlockNode, children: list[Item], ctx: ConversionContext) -> Item:
        if ctx.depth == 0:
            return self.section(ctx, children, self.background(node))
        return self.row(ctx, [self.column(ctx, 100, children)], self.background(node))

    def wrap_top_level(self, node: BlockNode, output: Item, ctx: ConversionContext) -> Item:
        match output["type"]:
            case "Section":
                return output
            case "Column":
                return self.section(ctx, [self.row(ctx, [output])])
            case _:
                return self.section(ctx, [output])

    def assemble(self, outputs: list[Item], ctx: ConversionContext) -> dict[str, Any]:
        return {"items": outputs}
