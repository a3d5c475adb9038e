"""Divi: et_pb_section / et_pb_row / et_pb_column shortcodes."""

from blockport.common.utils.normalize import detect_video_provider
from blockport.converters.base import BuilderConverter, ConversionContext, OutputFormat
from blockport.converters.markup import list_markup, shortcode, table_markup, tag
from blockport.processor import BlockNode

# column count -> Divi column type
COLUMN_TYPES = {1: "4_4", 2: "1_2", 3: "1_3", 4: "1_4", 5: "1_5", 6: "1_6"}


def column_type(count: int) -> str:
    return COLUMN_TYPES.get(count, "1_6")


class DiviConverter(BuilderConverter[str]):
    name = "divi"
    display_name = "Divi Builder"
    output_format = OutputFormat.SHORTCODE
    description = "Popular Elegant Themes page builder"

    def text_module(self, node: BlockNode, html: str) -> str:
        return shortcode(
            "et_pb_text",
            {"text_orientation": node.align, "text_text_color": node.text_color, "background_color": node.background_color},
            html,
        )

    def emit_heading(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.text_module(node, tag(f"h{node.level}", node.html))

    def emit_paragraph(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.text_module(node, tag("p", node.html))

    def emit_image(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode(
            "et_pb_image",
            {"src": node.url, "alt": node.alt, "title_text": node.caption, "align": node.align},
        )

    def emit_button(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode(
            "et_pb_button",
            {
                "button_url": node.url or "#",
                "button_text": node.text,
                "button_alignment": node.align,
                "custom_button": "on" if node.background_color or node.text_color else "",
                "button_bg_color": node.background_color,
                "button_text_color": node.text_color,
            },
        )

    def emit_list(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.text_module(node, list_markup(node.items, node.ordered))

    def emit_quote(self, node: BlockNode, ctx: ConversionContext) -> str:
        cite = tag("cite", node.caption) if node.caption else ""
        return self.text_module(node, tag("blockquote", node.html + cite))

    def emit_video(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode("et_pb_video", {"src": node.url})

    def emit_embed(self, node: BlockNode, ctx: ConversionContext) -> str:
        if detect_video_provider(node.url) != "hosted":
            return self.emit_video(node, ctx)
        return shortcode("et_pb_code", None, tag("iframe", src=node.url))

    def emit_separator(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode("et_pb_divider", {"color": node.background_color or node.text_color, "show_divider": "on"})

    def emit_table(self, node: BlockNode, ctx: ConversionContext) -> str:
        return self.text_module(node, table_markup(node.rows))

    def emit_raw(self, node: BlockNode, ctx: ConversionContext) -> str:
        return shortcode("et_pb_code", None, node.html)

    def section(self, content: str, background_color: str = "", background_image: str = "") -> str:
        return shortcode(
            "et_pb_section",
            {"background_color": background_color, "background_image": background_image},
            content,
        )

    def row(self, content: str, inner: bool) -> str:
        return shortcode("et_pb_row_inner" if inner else "et_pb_row", None, content)

    def column(self, content: str, kind: str, inner: bool) -> str:
        return shortcode("et_pb_column_inner" if inner else "et_pb_column", {"type": kind}, content)

    def emit_columns(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        if ctx.depth == 0:
            return self.section(self.row("".join(children), inner=False), node.background_color)
        return self.row("".join(children), inner=True)

    def emit_column(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        # a column directly under a top-level columns block is a regular column
        return self.column("".join(children), column_type(ctx.sibling_count), inner=ctx.depth > 1)

    def emit_group(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        content = "".join(children)
        if ctx.depth == 0:
            return self.section(self.row(self.column(content, "4_4", inner=False), inner=False), node.background_color, node.url)
        return self.row(self.column(content, "4_4", inner=True), inner=True)

    def wrap_top_level(self, node: BlockNode, output: str, ctx: ConversionContext) -> str:
        if node.kind.is_container:
            if output.startswith("[et_pb_column"):
                return self.section(self.row(output, inner=False))
            return output
        return self.section(self.row(self.column(output, "4_4", inner=False), inner=False))

    def assemble(self, outputs: list[str], ctx: ConversionContext) -> str:
        return "\n".join(outputs)
