"""Oxygen: nested ct_* components with integer ids."""

from typing import Any

from blockport.common.utils.normalize import detect_video_provider
from blockport.converters.base import BuilderConverter, ConversionContext, OutputFormat
from blockport.converters.elementor import clean
from blockport.converters.markup import list_markup, table_markup, tag
from blockport.processor import BlockNode

Component = dict[str, Any]

NICENAMES = {
    "ct_section": "Section",
    "ct_new_columns": "Columns",
    "ct_div_block": "Div",
    "ct_headline": "Heading",
    "ct_text_block": "Text",
    "ct_image": "Image",
    "ct_link_button": "Button",
    "ct_video": "Video",
    "ct_code_block": "Code Block",
}


class OxygenConverter(BuilderConverter[Component]):
    name = "oxygen"
    display_name = "Oxygen"
    output_format = OutputFormat.JSON
    description = "Visual design tool for WordPress"

    def component(
        self,
        ctx: ConversionContext,
        name: str,
        original: dict[str, Any] | None = None,
        children: list[Component] | None = None,
        **options: Any,
    ) -> Component:
        component_id = ctx.ids.next_int()
        return {
            "id": component_id,
            "name": name,
            "options": clean(
                {
                    "ct_id": component_id,
                    "ct_parent": 0,  # set in assemble
                    "selector": f"{name.removeprefix('ct_').replace('_', '-')}-{component_id}",
                    "nicename": f"{NICENAMES.get(name, name)} (#{component_id})",
                    "original": clean(original or {}),
                    **options,
                }
            ),
            "children": children or [],
        }

    def box_style(self, node: BlockNode) -> dict[str, Any]:
        padding = node.padding
        style: dict[str, Any] = {"background-color": node.background_color, "background-image": node.url}
        if not padding.is_zero:
            for side, unit in zip(padding.SIDES, padding.units):
                style[f"padding-{side}"] = getattr(padding, side)
                style[f"padding-{side}-unit"] = unit
        return style

    def text_style(self, node: BlockNode) -> dict[str, Any]:
        return {"color": node.text_color, "text-align": node.align}

    def emit_heading(self, node: BlockNode, ctx: ConversionContext) -> Component:
        return self.component(
            ctx, "ct_headline", {"tag": f"h{node.level}", **self.text_style(node)}, ct_content=node.html
        )

    def emit_paragraph(self, node: BlockNode, ctx: ConversionContext) -> Component:
        return self.component(ctx, "ct_text_block", self.text_style(node), ct_content=node.html)

    def emit_image(self, node: BlockNode, ctx: ConversionContext) -> Component:
        return self.component(ctx, "ct_image", {"src": node.url, "alt": node.alt, "image_type": "2"})

    def emit_button(self, node: BlockNode, ctx: ConversionContext) -> Component:
        original = {
            "url": node.url or "#",
            "button-style": "2" if node.is_outline else "1",
            "button-color": node.background_color,
            "button-text-color": node.text_color,
        }
        return self.component(ctx, "ct_link_button", original, ct_content=node.text)

    def emit_list(self, node: BlockNode, ctx: ConversionContext) -> Component:
        return self.component(ctx, "ct_text_block", self.text_style(node), ct_content=list_markup(node.items, node.ordered))

    def emit_quote(self, node: BlockNode, ctx: ConversionContext) -> Component:
        cite = tag("cite", node.caption) if node.caption else ""
        return self.component(ctx, "ct_text_block", {"tag": "blockquote"}, ct_content=node.html + cite)

    def emit_video(self, node: BlockNode, ctx: ConversionContext) -> Component:
        provider = detect_video_provider(node.url)
        return self.component(ctx, "ct_video", {"src": node.url, "use-custom": "0" if provider != "hosted" else "1"})

    def emit_embed(self, node: BlockNode, ctx: ConversionContext) -> Component:
        if detect_video_provider(node.url) != "hosted":
            return self.emit_video(node, ctx)
        return self.component(ctx, "ct_code_block", {"code-php": tag("iframe", src=node.url)})

    def emit_separator(self, node: BlockNode, ctx: ConversionContext) -> Component:
        color = node.background_color or node.text_color or "#DDDDDD"
        return self.component(ctx, "ct_div_block", {"width": "100", "width-unit": "%", "border-top-width": "1", "border-top-color": color})

    def emit_table(self, node: BlockNode, ctx: ConversionContext) -> Component:
        return self.component(ctx, "ct_code_block", {"code-php": table_markup(node.rows)})

    def emit_raw(self, node: BlockNode, ctx: ConversionContext) -> Component:
        return self.component(ctx, "ct_code_block", {"code-php": node.html})

    def emit_columns(self, node: BlockNode, children: list[Component], ctx: ConversionContext) -> Component:
        return self.component(ctx, "ct_new_columns", self.box_style(node), children)

    def emit_column(self, node: BlockNode, children: list[Component], ctx: ConversionContext) -> Component:
        width = str(node.attributes.get("width") or f"{100 / max(ctx.sibling_count, 1):.4g}%").rstrip("%")
        original = {"width": width, "width-unit": "%", **self.box_style(node)}
        return self.component(ctx, "ct_div_block", original, children)

    def emit_group(self, node: BlockNode, children: list[Component], ctx: ConversionContext) -> Component:
        name = "ct_section" if ctx.depth == 0 else "ct_div_block"
        return self.component(ctx, name, self.box_style(node), children)

    def wrap_top_level(self, node: BlockNode, output: Component, ctx: ConversionContext) -> Component:
        if output["name"] == "ct_section":
            return output
        return self.component(ctx, "ct_section", {}, [output])

    def _link(self, component: Component, parent: int, depth: int) -> Component:
        component["options"]["ct_parent"] = parent
        component["depth"] = depth
        for child in component["children"]:
            self._link(child, component["id"], depth + 1)
        return component

    def assemble(self, outputs: list[Component], ctx: ConversionContext) -> dict[str, Any]:
        return {
            "id": 0,
            "name": "root",
            "depth": 0,
            "children": [self._link(output, 0, 1) for output in outputs],
        }
