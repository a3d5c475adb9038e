"""OptimizePress: op_row / op_col shortcodes with op_* elements."""

from blockport.common.utils.normalize import detect_video_provider
from blockport.converters.base import BuilderConverter, ConversionContext, OutputFormat
from blockport.converters.markup import list_markup, shortcode, table_markup, tag
from blockport.processor import BlockNode


class OptimizePressConverter(BuilderConverter[str]):
    name = "optimizepress"
    display_name = "OptimizePress"
    output_format = OutputFormat.SHORTCODE
    description = "Landing page and sales funnel builder"
    aliases = ("optimize-press",)

    def text(self, node: BlockNode, html: str) -> str:
        return shortcode("op_text", {"align": node.align, "color": node.text_color}, html)

    def emit_heading(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode(
            "op_heading",
            {"tag": f"h{node.level}", "align": node.align, "color": node.text_color},
            node.html,
        )

    def emit_paragraph(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.text(node, tag("p", node.html))

    def emit_image(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode("op_image", {"src": node.url, "alt": node.alt, "caption": node.caption, "align": node.align})

    def emit_button(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode(
            "op_button",
            {
                "href": node.url or "#",
                "align": node.align,
                "style": "outline" if node.is_outline else "",
                "background": node.background_color,
                "color": node.text_color,
            },
            node.html,
        )

    def emit_list(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.text(node, list_markup(node.items, node.ordered))

    def emit_quote(self, node: BlockNode, ctx: ConversionContext) -> str:
        cite = tag("cite", node.caption) if node.caption else ""
        return self.text(node, tag("blockquote", node.html + cite))

    def emit_video(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode("op_video", {"url": node.url, "type": detect_video_provider(node.url)})

    def emit_embed(self, node: BlockNode, ctx: ConversionContext) -> str:
        if detect_video_provider(node.url) != "hosted":
            return self.emit_video(node, ctx)
        return shortcode("op_custom_html", None, tag("iframe", src=node.url))

    def emit_separator(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode("op_divider", {"color": node.background_color or node.text_color})

    def emit_table(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode("op_custom_html", None, table_markup(node.rows))

    def emit_raw(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode("op_custom_html", None, node.html)

    def row(self, content: str, background_color: str = "", background_image: str = "") -> str:
        return shortcode("op_row", {"background": background_color, "background_image": background_image}, content)

    def emit_columns(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        return self.row("".join(children), node.background_color)

    def emit_column(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        width = node.attributes.get("width") or f"{100 / max(ctx.sibling_count, 1):.4g}%"
        return shortcode("op_col", {"width": str(width)}, "".join(children))

    def emit_group(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        column = shortcode("op_col", {"width": "100%"}, "".join(children))
        return self.row(column, node.background_color, node.url)

    def wrap_top_level(self, node: BlockNode, output: str, ctx: ConversionContext) -> str:
        if output.startswith("[op_row"):
            return output
        if output.startswith("[op_col "):
            return self.row(output)
        return self.row(shortcode("op_col", {"width": "100%"}, output))

    def assemble(self, outputs: list[str], ctx: ConversionContext) -> str:
        return "\n".join(outputs)
