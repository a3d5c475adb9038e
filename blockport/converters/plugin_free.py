"""Plugin-free theme output: plain semantic HTML, no builder dependency."""

from blockport.common.utils.normalize import detect_video_provider
from blockport.converters.base import BuilderConverter, ConversionContext, OutputFormat
from blockport.converters.markup import list_markup, style_attr, table_markup, tag, void_tag
from blockport.processor import BlockNode

EMBED_URLS = {
    "youtube": "https://www.youtube.com/embed/{}",
    "vimeo": "https://player.vimeo.com/video/{}",
}


def embed_src(url: str) -> str:
    """Player URL for a YouTube/Vimeo page URL; anything else is returned as-is."""
    provider = detect_video_provider(url)
    if provider == "hosted" or "/embed/" in url or "player.vimeo.com" in url:
        return url
    tail = url.rstrip("/").split("/")[-1]
    if provider == "youtube" and "v=" in tail:
        tail = tail.split("v=", 1)[1].split("&", 1)[0]
    return EMBED_URLS[provider].format(tail)


class PluginFreeConverter(BuilderConverter[str]):
    name = "plugin-free"
    display_name = "Plugin-Free Theme"
    output_format = OutputFormat.HTML
    description = "Pure semantic HTML without builder dependencies"
    aliases = ("pluginfree",)

    def style(self, node: BlockNode, **extra: str) -> str:
        align = node.align
        padding = node.padding
        return style_attr(
            {
                "text-align": align if align != "left" else "",
                "color": node.text_color,
                "background-color": node.background_color,
                "padding": "" if padding.is_zero else padding.css(),
                **extra,
            }
        )

    def emit_heading(self, node: BlockNode, ctx: ConversionContext) -> str:
        return tag(f"h{node.level}", node.html, style=self.style(node))

    def emit_paragraph(self, node: BlockNode, ctx: ConversionContext) -> str:
        return tag("p", node.html, style=self.style(node))

    def emit_image(self, node: BlockNode, ctx: ConversionContext) -> str:
        img = void_tag("img", src=node.url, alt=node.alt, loading="lazy")
        caption = tag("figcaption", node.caption) if node.caption else ""
        return tag("figure", img + caption)

    def emit_button(self, node: BlockNode, ctx: ConversionContext) -> str:
        return tag(
            "a",
            node.html,
            href=node.url or "#",
            class_="button button-outline" if node.is_outline else "button",
            style=self.style(node),
        )

    def emit_list(self, node: BlockNode, ctx: ConversionContext) -> str:
        return list_markup(node.items, node.ordered)

    def emit_quote(self, node: BlockNode, ctx: ConversionContext) -> str:
        cite = tag("cite", node.caption) if node.caption else ""
        return tag("blockquote", node.html + cite)

    def emit_video(self, node: BlockNode, ctx: ConversionContext) -> str:
        if detect_video_provider(node.url) != "hosted":
            return self.emit_embed(node, ctx)
        return tag("video", controls=True, src=node.url)

    def emit_embed(self, node: BlockNode, ctx: ConversionContext) -> str:
        iframe = tag("iframe", src=embed_src(node.url), loading="lazy", allowfullscreen=True)
        return tag("div", iframe, class_="embed")

    def emit_separator(self, node: BlockNode, ctx: ConversionContext) -> str:
        return void_tag("hr")

    def emit_table(self, node: BlockNode, ctx: ConversionContext) -> str:
        return table_markup(node.rows)

    def emit_raw(self, node: BlockNode, ctx: ConversionContext) -> str:
        return node.html

    def emit_columns(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        inner = "\n".join(children)
        return tag("div", f"\n{inner}\n", class_="columns", style=self.style(node, display="flex", gap="2rem"))

    def emit_column(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        width = node.attributes.get("width")
        flex = f"0 0 {width}" if width else "1 1 0"
        inner = "\n".join(children)
        return tag("div", f"\n{inner}\n", class_="column", style=self.style(node, flex=flex))

    def emit_group(self, node: BlockNode, children: list[str], ctx: ConversionContext) -> str:
        background = f"url('{node.url}')" if node.url else ""
        inner = "\n".join(children)
        element = "section" if ctx.depth == 0 else "div"
        return tag(
            element,
            f"\n{inner}\n",
            class_="group",
            style=self.style(node, **{"background-image": background, "background-size": "cover" if background else ""}),
        )

    def assemble(self, outputs: list[str], ctx: ConversionContext) -> str:
        return "\n\n".join(outputs)
