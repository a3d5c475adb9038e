"""Kadence Blocks: Gutenberg markup with kadence/* blocks where Kadence has one."""

from typing import Any

from blockport.converters.base import ConversionContext
from blockport.converters.gutenberg import GutenbergConverter, classes
from blockport.converters.markup import block_comment, tag, void_tag
from blockport.processor import BlockKind, BlockNode


class KadenceConverter(GutenbergConverter):
    name = "kadence"
    display_name = "Kadence Blocks"
    description = "Gutenberg-enhanced blocks for WordPress"

    def unique_id(self, ctx: ConversionContext) -> str:
        return f"_{ctx.ids.next_hex(6)}"

    def kadence_attrs(self, node: BlockNode, block_name: str, ctx: ConversionContext, **extra: Any) -> dict[str, Any]:
        attributes = self.attrs(node, block_name, **extra)
        attributes.setdefault("uniqueID", self.unique_id(ctx))
        return attributes

    def emit_heading(self, node: BlockNode, ctx: ConversionContext) -> str:
        attributes = self.kadence_attrs(
            node,
            "kadence/advancedheading",
            ctx,
            level=node.level,
            align=node.align if node.align != "left" else "",
            color=node.text_color,
        )
        unique = attributes["uniqueID"]
        html = tag(f"h{node.level}", node.html, class_=classes("kt-adv-heading", f"kt-adv-heading{unique}"))
        return block_comment("kadence/advancedheading", attributes, html)

    def emit_image(self, node: BlockNode, ctx: ConversionContext) -> str:
        attributes = self.kadence_attrs(node, "kadence/image", ctx, alt=node.alt)
        caption = tag("figcaption", node.caption) if node.caption else ""
        img = void_tag("img", src=node.url, alt=node.alt, class_="kb-img")
        html = tag("figure", img + caption, class_=classes("wp-block-kadence-image", f"kb-image{attributes['uniqueID']}"))
        return block_comment("kadence/image", attributes, html)

    def emit_button(self, node: BlockNode, ctx: ConversionContext) -> str:
        attributes = self.kadence_attrs(
            node,
            "kadence/singlebtn",
            ctx,
            text=node.text,
            link=node.url,
            inheritStyles="outline" if node.is_outline else "fill",
        )
        link = tag("a", tag("span", node.html, class_="kt-btn-inner-text"), class_="kb-button kt-button", href=node.url)
        button = block_comment("kadence/singlebtn", attributes, link)
        if ctx.parent_kind is BlockKind.GROUP:
            return button
        wrapper = tag("div", f"\n{button}\n", class_="wp-block-kadence-advancedbtn kb-buttons-wrap")
        return block_comment("kadence/advancedbtn", {"uniqueID": self.unique_id(ctx)}, wrapper)

    def emit_columns(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        attributes = self.kadence_attrs(node, "kadence/rowlayout", ctx, columns=len(children), colLayout="equal")
        inner = "\n\n".join(children)
        html = tag("div", f"\n{inner}\n", class_=classes("kb-row-layout-wrap", f"kb-row-layout-id{attributes['uniqueID']}"))
        return block_comment("kadence/rowlayout", attributes, html)

    def emit_column(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        attributes = self.kadence_attrs(node, "kadence/column", ctx, id=ctx.index + 1)
        inner = "\n\n".join(children)
        html = tag(
            "div",
            tag("div", f"\n{inner}\n", class_="kt-inside-inner-col"),
            class_=classes("wp-block-kadence-column", f"kadence-column{attributes['uniqueID']}"),
        )
        return block_comment("kadence/column", attributes, html)

    def emit_group(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        if node.name == "core/buttons" or node.name == "kadence/advancedbtn":
            attributes = self.kadence_attrs(node, "kadence/advancedbtn", ctx)
            inner = "\n".join(children)
            wrapper = tag("div", f"\n{inner}\n", class_="wp-block-kadence-advancedbtn kb-buttons-wrap")
            return block_comment("kadence/advancedbtn", attributes, wrapper)
        return super().emit_group(node, children, ctx)
