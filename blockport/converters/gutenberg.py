"""Gutenberg: block comments around canonical core block HTML."""

from typing import Any

from blockport.common.utils.normalize import detect_video_provider, escape_html
from blockport.converters.base import BuilderConverter, ConversionContext, OutputFormat
from blockport.converters.markup import block_comment, style_attr, table_markup, tag, void_tag
from blockport.processor import BlockKind, BlockNode


def classes(*names: str) -> str:
    return " ".join(name for name in names if name)


class GutenbergConverter(BuilderConverter[str]):
    name = "gutenberg"
    display_name = "Gutenberg"
    output_format = OutputFormat.HTML
    description = "Native WordPress block editor"

    def attrs(self, node: BlockNode, block_name: str, **extra: Any) -> dict[str, Any]:
        """Source attributes when the block is re-emitted as itself, plus overrides."""
        base = dict(node.attributes) if node.name == block_name else {}
        base.update({key: value for key, value in extra.items() if value not in (None, "", False)})
        return base

    def align_class(self, node: BlockNode) -> str:
        align = node.align
        return f"has-text-align-{align}" if align != "left" else ""

    def inline_style(self, node: BlockNode) -> str:
        padding = node.padding
        return style_attr(
            {
                "color": node.text_color,
                "background-color": node.background_color,
                "padding": "" if padding.is_zero else padding.css(),
            }
        )

    def emit_heading(self, node: BlockNode, ctx: ConversionContext) -> str:
        align = node.align if node.align != "left" else ""
        attributes = self.attrs(node, "core/heading", textAlign=align)
        if node.level != 2:
            attributes["level"] = node.level
        else:
            attributes.pop("level", None)
        html = tag(
            f"h{node.level}",
            node.html,
            class_=classes("wp-block-heading", self.align_class(node)),
            style=self.inline_style(node),
        )
        return block_comment("heading", attributes, html)

    def emit_paragraph(self, node: BlockNode, ctx: ConversionContext) -> str:
        align = node.align if node.align != "left" else ""
        attributes = self.attrs(node, "core/paragraph", align=align)
        html = tag("p", node.html, class_=self.align_class(node), style=self.inline_style(node))
        return block_comment("paragraph", attributes, html)

    def emit_image(self, node: BlockNode, ctx: ConversionContext) -> str:
        attributes = self.attrs(node, "core/image", sizeSlug=node.attributes.get("sizeSlug") or "large")
        caption = tag("figcaption", node.caption, class_="wp-element-caption") if node.caption else ""
        img = void_tag("img", src=node.url, alt=node.alt)
        html = tag("figure", img + caption, class_=classes("wp-block-image", f"size-{attributes['sizeSlug']}"))
        return block_comment("image", attributes, html)

    def emit_button(self, node: BlockNode, ctx: ConversionContext) -> str:
        link = tag(
            "a",
            node.html,
            class_="wp-block-button__link wp-element-button",
            href=node.url,
            style=self.inline_style(node),
        )
        button_class = classes("wp-block-button", "is-style-outline" if node.is_outline else "")
        button = block_comment("button", self.attrs(node, "core/button"), tag("div", link, class_=button_class))
        if ctx.parent_kind is BlockKind.GROUP:
            return button
        return block_comment("buttons", None, tag("div", f"\n{button}\n", class_="wp-block-buttons"))

    def emit_list(self, node: BlockNode, ctx: ConversionContext) -> str:
        items = "\n".join(block_comment("list-item", None, f"<li>{item}</li>") for item in node.items)
        list_tag = "ol" if node.ordered else "ul"
        attributes = self.attrs(node, "core/list", ordered=node.ordered)
        return block_comment("list", attributes, tag(list_tag, f"\n{items}\n", class_="wp-block-list"))

    def emit_quote(self, node: BlockNode, ctx: ConversionContext) -> str:
        body = node.html
        if not body.lstrip().startswith("<"):
            body = block_comment("paragraph", None, f"<p>{body}</p>")
        cite = tag("cite", node.caption) if node.caption else ""
        return block_comment(
            "quote", self.attrs(node, "core/quote"), tag("blockquote", body + cite, class_="wp-block-quote")
        )

    def emit_video(self, node: BlockNode, ctx: ConversionContext) -> str:
        if detect_video_provider(node.url) != "hosted":
            return self.emit_embed(node, ctx)
        video = tag("video", controls=True, src=node.url)
        return block_comment("video", self.attrs(node, "core/video"), tag("figure", video, class_="wp-block-video"))

    def emit_embed(self, node: BlockNode, ctx: ConversionContext) -> str:
        provider = detect_video_provider(node.url)
        if provider == "hosted":
            return self.emit_raw(node.model_copy(update={"html": tag("iframe", src=node.url)}), ctx)
        attributes = self.attrs(node, "core/embed", url=node.url, type="video", providerNameSlug=provider)
        wrapper = tag("div", f"\n{escape_html(node.url)}\n", class_="wp-block-embed__wrapper")
        figure_class = classes(
            "wp-block-embed", "is-type-video", f"is-provider-{provider}", f"wp-block-embed-{provider}"
        )
        return block_comment("embed", attributes, tag("figure", wrapper, class_=figure_class))

    def emit_separator(self, node: BlockNode, ctx: ConversionContext) -> str:
        hr = void_tag("hr", class_="wp-block-separator has-alpha-channel-opacity")
        return block_comment("separator", self.attrs(node, "core/separator"), hr)

    def emit_table(self, node: BlockNode, ctx: ConversionContext) -> str:
        return block_comment("table", None, tag("figure", table_markup(node.rows), class_="wp-block-table"))

    def emit_raw(self, node: BlockNode, ctx: ConversionContext) -> str:
        return block_comment("html", None, node.html)

    def emit_columns(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        inner = "\n\n".join(children)
        html = tag("div", f"\n{inner}\n", class_="wp-block-columns", style=self.inline_style(node))
        return block_comment("columns", self.attrs(node, "core/columns"), html)

    def emit_column(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        attributes = self.attrs(node, "core/column")
        width = attributes.get("width")
        style = style_attr({"flex-basis": str(width) if width else ""})
        inner = "\n\n".join(children)
        return block_comment("column", attributes, tag("div", f"\n{inner}\n", class_="wp-block-column", style=style))

    def emit_group(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        inner = "\n\n".join(children)
        if node.name == "core/buttons":
            return block_comment("buttons", self.attrs(node, "core/buttons"), tag("div", f"\n{inner}\n", class_="wp-block-buttons"))
        if node.url:
            background = void_tag("img", class_="wp-block-cover__image-background", src=node.url, alt="")
            container = tag("div", f"\n{inner}\n", class_="wp-block-cover__inner-container")
            html = tag("div", background + container, class_="wp-block-cover")
            return block_comment("cover", self.attrs(node, "core/cover", url=node.url), html)
        html = tag("div", f"\n{inner}\n", class_="wp-block-group", style=self.inline_style(node))
        return block_comment("group", self.attrs(node, "core/group"), html)

    def assemble(self, outputs: list[str], ctx: ConversionContext) -> str:
        return "\n\n".join(outputs)
