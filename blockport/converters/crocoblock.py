"""Crocoblock (JetEngine): Elementor flex containers inside a jet-engine-template envelope."""

from typing import Any

from blockport.converters.base import ConversionContext
from blockport.converters.elementor import Element, ElementorConverter, clean
from blockport.processor import BlockNode

TEMPLATE_VERSION = "1.0.0"


class CrocoblockConverter(ElementorConverter):
    name = "crocoblock"
    display_name = "Crocoblock (JetEngine)"
    description = "Dynamic content and custom post types"
    aliases = ("jetengine", "jet-engine")

    section_type = "container"

    def widget(self, ctx: ConversionContext, widget_type: str, settings: dict[str, Any]) -> Element:
        element = super().widget(ctx, widget_type, settings)
        # slot for JetEngine dynamic tags, filled in the editor
        element["settings"]["__dynamic__"] = {}
        return element

    def column(self, ctx: ConversionContext, size: int, elements: list[Element], settings: dict[str, Any] | None = None) -> Element:
        return {
            "id": ctx.ids.next_hex(),
            "elType": "container",
            "isInner": True,
            "settings": clean(
                {
                    "content_width": "full",
                    "flex_direction": "column",
                    "width": {"unit": "%", "size": size},
                    **(settings or {}),
                }
            ),
            "elements": elements,
        }

    def section(self, ctx: ConversionContext, columns: list[Element], settings: dict[str, Any], inner: bool = False) -> Element:
        settings = {**settings, "flex_direction": "row" if len(columns) > 1 else "column"}
        settings.pop("structure", None)
        settings.pop("layout", None)
        return super().section(ctx, columns, settings, inner)

    def _as_column(self, element: Element, ctx: ConversionContext, size: int) -> Element:
        if element["elType"] == "container" and element["settings"].get("flex_direction") == "column":
            return element
        return self.column(ctx, size, [element])

    def wrap_top_level(self, node: BlockNode, output: Element, ctx: ConversionContext) -> Element:
        if output["elType"] == "widget":
            return self.section(ctx, [output], {})
        output["isInner"] = False
        return output

    def emit_list(self, node: BlockNode, ctx: ConversionContext) -> Element:
        icon = "fas fa-circle" if not node.ordered else "fas fa-hashtag"
        return self.widget(
            ctx,
            "icon-list",
            {"icon_list": [{"text": item, "selected_icon": {"value": icon, "library": "fa-solid"}} for item in node.items]},
        )

    def emit_table(self, node: BlockNode, ctx: ConversionContext) -> Element:
        head, *body = node.rows or [[]]
        return self.widget(
            ctx,
            "jet-table",
            {
                "table_header": [{"cell_text": cell} for cell in head],
                "table_body": [{"cell": [{"cell_text": cell} for cell in row]} for row in body],
            },
        )

    def assemble(self, outputs: list[Element], ctx: ConversionContext) -> dict[str, Any]:
        return {
            "version": TEMPLATE_VERSION,
            "type": "jet-engine-template",
            "content": outputs,
        }
