"""Beaver Builder: fl_row / fl_col / fl_module shortcodes."""

from blockport.common.utils.normalize import detect_video_provider
from blockport.converters.base import BuilderConverter, ConversionContext, OutputFormat
from blockport.converters.markup import list_markup, shortcode, table_markup, tag
from blockport.processor import BlockNode


def column_size(count: int) -> str:
    return f"{100 / max(count, 1):.2f}".rstrip("0").rstrip(".")


class BeaverBuilderConverter(BuilderConverter[str]):
    name = "beaver-builder"
    display_name = "Beaver Builder"
    output_format = OutputFormat.SHORTCODE
    description = "Professional page builder for WordPress"
    aliases = ("beaverbuilder", "beaver")

    def module(self, module_type: str, attributes: dict[str, str] | None = None, content: str = "") -> str:
        return shortcode("fl_module", {"type": module_type, **(attributes or {})}, content)

    def html_module(self, html: str) -> str:
        return self.module("html", None, html)

    def emit_heading(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.module(
            "heading",
            {"tag": f"h{node.level}", "alignment": node.align, "color": node.text_color.lstrip("#")},
            node.html,
        )

    def emit_paragraph(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.module("rich-text", {"color": node.text_color.lstrip("#")}, tag("p", node.html))

    def emit_image(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.module(
            "photo",
            {"photo_source": "url", "photo_url": node.url, "alt": node.alt, "caption": node.caption, "align": node.align},
        )

    def emit_button(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.module(
            "button",
            {
                "text": node.text,
                "link": node.url or "#",
                "align": node.align,
                "style": "transparent" if node.is_outline else "flat",
                "bg_color": node.background_color.lstrip("#"),
                "text_color": node.text_color.lstrip("#"),
            },
        )

    def emit_list(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.html_module(list_markup(node.items, node.ordered))

    def emit_quote(self, node: BlockNode, ctx: ConversionContext) -> str:
        cite = tag("cite", node.caption) if node.caption else ""
        return self.html_module(tag("blockquote", node.html + cite))

    def emit_video(self, node: BlockNode, ctx: ConversionContext) -> str:
        provider = detect_video_provider(node.url)
        if provider == "hosted":
            return self.module("video", {"video_type": "html5", "video": node.url})
        return self.module("video", {"video_type": "embed", "embed_code": node.url, "provider": provider})

    def emit_embed(self, node: BlockNode, ctx: ConversionContext) -> str:
        if detect_video_provider(node.url) != "hosted":
            return self.emit_video(node, ctx)
        return self.html_module(tag("iframe", src=node.url))

    def emit_separator(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.module("separator", {"color": node.background_color.lstrip("#")})

    def emit_table(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.html_module(table_markup(node.rows))

    def emit_raw(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.html_module(node.html)

    def row(self, node: BlockNode | None, content: str) -> str:
        attributes = {}
        if node is not None:
            attributes = {"bg_color": node.background_color.lstrip("#"), "bg_image_src": node.url}
        return shortcode("fl_row", attributes, content)

    def emit_columns(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        content = "".join(children)
        if ctx.depth == 0:
            return self.row(node, content)
        return shortcode("fl_col_group", None, content)

    def emit_column(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        return shortcode("fl_col", {"size": column_size(ctx.sibling_count)}, "".join(children))

    def emit_group(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        column = shortcode("fl_col", {"size": "100"}, "".join(children))
        if ctx.depth == 0:
            return self.row(node, column)
        return shortcode("fl_col_group", None, column)

    def wrap_top_level(self, node: BlockNode, output: str, ctx: ConversionContext) -> str:
        if output.startswith("[fl_row"):
            return output
        if output.startswith("[fl_col "):
            return self.row(None, output)
        return self.row(None, shortcode("fl_col", {"size": "100"}, output))

    def assemble(self, outputs: list[str], ctx: ConversionContext) -> str:
        return "\n".join(outputs)
