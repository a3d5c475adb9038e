"""Tests for block/snapshot normalization into BlockNodes and the layout heuristics."""

import pytest

from blockport.blocks import ContentBlock, parse_blocks
from blockport.common.utils.config import get_config, set_config
from blockport.processor import (
    BlockKind,
    detect_columns,
    filter_visible,
    group_rows,
    node_from_block,
    node_from_element,
    reading_order,
    snapshot_to_nodes,
)


class TestNodeFromBlock:
    def test_page_kinds(self, page_blocks):
        kinds = [node_from_block(block).kind for block in page_blocks]
        assert kinds == [
            BlockKind.HEADING,
            BlockKind.PARAGRAPH,
            BlockKind.IMAGE,
            BlockKind.GROUP,
            BlockKind.LIST,
            BlockKind.QUOTE,
            BlockKind.EMBED,
            BlockKind.SEPARATOR,
            BlockKind.TABLE,
            BlockKind.RAW,
            BlockKind.GROUP,
        ]

    def test_heading(self, page_blocks):
        node = node_from_block(page_blocks[0])
        assert node.level == 1
        assert node.html == "Welcome"
        assert node.align == "center"

    def test_heading_level_from_markup(self):
        node = node_from_block(ContentBlock(name="heading", raw_inner_content="<h3>Sub</h3>"))
        assert node.level == 3
        assert node.text == "Sub"

    @pytest.mark.parametrize("level", ["1e400", "-Infinity", "NaN"])
    def test_non_finite_heading_level_falls_back_to_markup(self, level):
        blocks = parse_blocks(f'<!-- wp:heading {{"level":{level}}} --><h4>Huge</h4><!-- /wp:heading -->')
        assert node_from_block(blocks[0]).level == 4

    def test_paragraph_keeps_inline_markup(self, page_blocks):
        node = node_from_block(page_blocks[1])
        assert node.html == "Intro with <strong>bold</strong> text."
        assert node.text == "Intro with bold text."

    def test_image(self, page_blocks):
        node = node_from_block(page_blocks[2])
        assert node.url == "https://example.test/hero.jpg"
        assert node.alt == "Hero"
        assert node.caption == "Caption"

    def test_button_inside_buttons(self, page_blocks):
        buttons = node_from_block(page_blocks[3])
        button = buttons.children[0]
        assert button.kind is BlockKind.BUTTON
        assert button.html == "Sign up"
        assert button.url == "https://example.test/signup"
        assert button.is_outline

    def test_list(self, page_blocks):
        node = node_from_block(page_blocks[4])
        assert node.items == ["One", "Two"]
        assert node.ordered
        # list items are kept as children so they are still counted
        assert len(node.children) == 2

    def test_quote(self, page_blocks):
        node = node_from_block(page_blocks[5])
        assert node.html == "<p>Be yourself.</p>"
        assert node.caption == "Oscar"

    def test_embed(self, page_blocks):
        assert node_from_block(page_blocks[6]).url == "https://www.youtube.com/watch?v=abc123"

    def test_table(self, page_blocks):
        assert node_from_block(page_blocks[8]).rows == [["Plan", "Price"], ["Pro", "$9"]]

    def test_unknown_leaf_passes_markup_through(self, page_blocks):
        node = node_from_block(page_blocks[9])
        assert node.name == "acf/testimonial"
        assert node.html == '<div class="testimonial">Great product</div>'

    def test_unknown_block_with_children_becomes_group(self):
        blocks = parse_blocks(
            "<!-- wp:acme/box --><!-- wp:paragraph --><p>x</p><!-- /wp:paragraph --><!-- /wp:acme/box -->"
        )
        node = node_from_block(blocks[0])
        assert node.kind is BlockKind.GROUP
        assert node.children[0].kind is BlockKind.PARAGRAPH

    def test_cover_background(self, page_blocks):
        node = node_from_block(page_blocks[10])
        assert node.url == "https://example.test/bg.jpg"
        assert node.children[0].text == "On a background"

    def test_legacy_embed_namespace(self):
        node = node_from_block(ContentBlock(namespace="core-embed", name="youtube", attributes={"url": "u"}))
        assert node.kind is BlockKind.EMBED

    def test_colors_and_padding_from_attributes(self):
        node = node_from_block(
            ContentBlock(
                name="group",
                attributes={"style": {"color": {"background": "rgb(255, 255, 255)"}, "spacing": {"padding": "8px"}}},
            )
        )
        assert node.background_color == "#FFFFFF"
        assert node.padding.top == "8"


class TestNodeFromElement:
    def test_heading_level(self, make_element):
        assert node_from_element(make_element("h3", "Title")).level == 3

    def test_text_is_escaped(self, make_element):
        node = node_from_element(make_element("p", "Tom & Jerry <3"))
        assert node.html == "Tom &amp; Jerry &lt;3"
        assert node.text == "Tom & Jerry <3"

    def test_button_like_link(self, make_element):
        node = node_from_element(
            make_element("a", "Buy", attributes={"class": "btn btn-primary", "href": "https://example.test/buy"})
        )
        assert node.kind is BlockKind.BUTTON
        assert node.url == "https://example.test/buy"

    def test_plain_link_is_not_content(self, make_element):
        assert node_from_element(make_element("a", "Read more", attributes={"href": "/x"})).kind is BlockKind.RAW

    def test_background_image_element(self, make_element):
        node = node_from_element(make_element("div", style={"background-image": 'url("https://example.test/bg.png")'}))
        assert node.kind is BlockKind.IMAGE
        assert node.url == "https://example.test/bg.png"

    def test_list_items_from_lines(self, make_element):
        node = node_from_element(make_element("ol", "First\nSecond\n"))
        assert node.items == ["First", "Second"]
        assert node.ordered

    def test_computed_style_is_used(self, make_element):
        node = node_from_element(make_element("p", "x", style={"text-align": "center", "color": "rgb(0, 0, 0)"}))
        assert node.align == "center"
        assert node.text_color == "#000000"


class TestFilterVisible:
    def test_hidden_elements_are_removed(self, make_element):
        elements = [
            make_element("p", "shown"),
            make_element("p", "no size", width=0),
            make_element("p", "display", style={"display": "none"}),
            make_element("p", "visibility", style={"visibility": "hidden"}),
            make_element("p", "opacity", style={"opacity": "0"}),
            make_element("p", "flag", visible=False),
        ]
        assert [element.text for element in filter_visible(elements)] == ["shown"]

    def test_order_is_preserved(self, make_element):
        elements = [make_element("p", str(i), y=100 - i) for i in range(5)]
        assert filter_visible(elements) == elements


class TestLayout:
    def test_reading_order(self, make_element):
        elements = [
            make_element("p", "second line", x=0, y=40),
            make_element("p", "right", x=300, y=2),
            make_element("p", "left", x=0, y=0),
        ]
        assert [element.text for element in reading_order(elements)] == ["left", "right", "second line"]

    def test_group_rows(self, make_element):
        elements = [
            make_element("p", "b", x=200, y=10),
            make_element("p", "a", x=0, y=0),
            make_element("p", "c", x=0, y=60),
            make_element("p", "d", x=0, y=70),
        ]
        rows = group_rows(elements)
        assert [[element.text for element in row] for row in rows] == [["a", "b"], ["c", "d"]]

    def test_row_tolerance_is_exclusive(self, make_element):
        rows = group_rows([make_element("p", "a", y=0), make_element("p", "b", y=50)])
        assert len(rows) == 2

    def test_custom_tolerance(self, make_element):
        rows = group_rows([make_element("p", "a", y=0), make_element("p", "b", y=10)], tolerance=5)
        assert len(rows) == 2

    def test_detect_columns_from_widest_row(self, make_element):
        elements = [
            make_element("p", "a", x=0, y=0),
            make_element("p", "b", x=300, y=0),
            make_element("p", "c", x=600, y=0),
            make_element("p", "d", x=0, y=200),
        ]
        columns = detect_columns(elements)
        assert [[element.text for element in column] for column in columns] == [["a"], ["b"], ["c"]]

    def test_detect_columns_tie_gives_single_column(self, make_element):
        elements = [
            make_element("p", "a", x=0, y=0),
            make_element("p", "b", x=300, y=0),
            make_element("p", "c", x=0, y=200),
            make_element("p", "d", x=300, y=200),
        ]
        assert detect_columns(elements) == [elements]

    def test_detect_columns_single_element_rows(self, make_element):
        elements = [make_element("p", "a", y=0), make_element("p", "b", y=200)]
        assert detect_columns(elements) == [elements]

    def test_detect_columns_empty(self):
        assert detect_columns([]) == []


class TestSnapshotToNodes:
    def test_layout_is_rebuilt(self, snapshot_elements):
        nodes = snapshot_to_nodes(snapshot_elements)
        assert [node.kind for node in nodes] == [
            BlockKind.HEADING,
            BlockKind.COLUMNS,
            BlockKind.IMAGE,
            BlockKind.QUOTE,
        ]
        columns = nodes[1]
        assert [column.kind for column in columns.children] == [BlockKind.COLUMN, BlockKind.COLUMN]
        assert [column.children[0].text for column in columns.children] == ["Left column", "Right column"]

    def test_input_is_not_mutated(self, snapshot_elements):
        before = list(snapshot_elements)
        snapshot_to_nodes(snapshot_elements)
        assert snapshot_elements == before

    def test_stacked_elements_in_one_row_stay_leaves(self, make_element):
        elements = [
            make_element("h2", "Title", 0, 0, 800, 40),
            make_element("p", "Body", 0, 45, 800, 20),
        ]
        nodes = snapshot_to_nodes(elements)
        assert [node.kind for node in nodes] == [BlockKind.HEADING, BlockKind.PARAGRAPH]

    def test_same_line_in_a_column_reads_left_to_right(self, make_element):
        elements = [
            make_element("p", "right", 200, 0, 400, 20),
            make_element("p", "left", 0, 5, 400, 20),
        ]
        nodes = snapshot_to_nodes(elements)
        assert [node.text for node in nodes] == ["left", "right"]

    def test_element_cap(self, snapshot_elements):
        set_config(get_config().model_copy(update={"max_elements": 2}))
        nodes = snapshot_to_nodes(snapshot_elements)
        assert [node.kind for node in nodes] == [BlockKind.HEADING]

    def test_empty_snapshot(self):
        assert snapshot_to_nodes([]) == []
