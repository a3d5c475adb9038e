"""Tests for the block markup parser."""

import logging

import pytest

from blockport.blocks import count_blocks, has_block_markup, parse_blocks, strip_block_markers
from blockport.blocks.models import ContentBlock
from blockport.blocks.parser import parse_attributes
from blockport.common.models import ParseOptions


def nested_groups(depth: int) -> str:
    return "<!-- wp:group -->" * depth + "<p>deep</p>" + "<!-- /wp:group -->" * depth


def tree_depth(blocks: list[ContentBlock]) -> int:
    if not blocks:
        return 0
    return 1 + max(tree_depth(block.children) for block in blocks)


def deepest(block: ContentBlock) -> ContentBlock:
    while block.children:
        block = block.children[0]
    return block


class TestBasicParsing:
    def test_heading_block(self):
        blocks = parse_blocks('<!-- wp:heading {"level":2} -->\n<h2>My Heading</h2>\n<!-- /wp:heading -->')
        assert len(blocks) == 1
        assert blocks[0].namespace == "core"
        assert blocks[0].name == "heading"
        assert blocks[0].attributes == {"level": 2}
        assert blocks[0].raw_inner_content == "<h2>My Heading</h2>"
        assert blocks[0].children == []

    def test_paragraph_without_attributes(self):
        blocks = parse_blocks("<!-- wp:paragraph -->\n<p>This is a paragraph.</p>\n<!-- /wp:paragraph -->")
        assert blocks[0].attributes == {}
        assert "<p>This is a paragraph.</p>" in blocks[0].raw_inner_content

    def test_multiple_top_level_blocks(self, page_blocks):
        names = [block.name for block in page_blocks]
        assert names[:3] == ["heading", "paragraph", "image"]
        assert len(page_blocks) == 11

    def test_namespaced_block(self):
        blocks = parse_blocks(
            '<!-- wp:acf/testimonial {"id":"block_123"} -->\n<div>Custom</div>\n<!-- /wp:acf/testimonial -->'
        )
        assert blocks[0].namespace == "acf"
        assert blocks[0].name == "testimonial"
        assert blocks[0].full_name == "acf/testimonial"
        assert blocks[0].attributes == {"id": "block_123"}

    def test_self_closing_block(self):
        blocks = parse_blocks("<!-- wp:separator /-->")
        assert len(blocks) == 1
        assert blocks[0].name == "separator"
        assert blocks[0].children == []
        assert blocks[0].raw_inner_content == ""

    def test_self_closing_with_attributes(self):
        blocks = parse_blocks('<!-- wp:spacer {"height":"40px"} /-->')
        assert blocks[0].attributes == {"height": "40px"}

    def test_nested_json_attributes(self):
        blocks = parse_blocks(
            '<!-- wp:group {"style":{"color":{"background":"#ffffff"}}} --><div></div><!-- /wp:group -->'
        )
        assert blocks[0].attributes == {"style": {"color": {"background": "#ffffff"}}}

    def test_empty_content(self):
        assert parse_blocks("") == []

    def test_content_without_markers(self):
        assert parse_blocks("<p>Regular HTML without blocks</p>") == []


class TestMalformedInput:
    def test_invalid_json_gives_empty_attributes(self, caplog):
        with caplog.at_level(logging.WARNING):
            blocks = parse_blocks("<!-- wp:heading {not valid json} -->\n<h2>Title</h2>\n<!-- /wp:heading -->")
        assert len(blocks) == 1
        assert blocks[0].name == "heading"
        assert blocks[0].attributes == {}
        assert "Malformed block attributes" in caplog.text

    @pytest.mark.parametrize("raw", ["[1, 2]", "null", "42", '"text"', "", None])
    def test_non_object_attributes_become_empty(self, raw):
        assert parse_attributes(raw) == {}

    def test_stray_closer_is_ignored(self):
        blocks = parse_blocks("<!-- /wp:paragraph --><!-- wp:heading --><h2>A</h2><!-- /wp:heading -->")
        assert [block.name for block in blocks] == ["heading"]

    def test_unclosed_block_closes_at_end_of_input(self):
        blocks = parse_blocks("<!-- wp:group --><!-- wp:paragraph --><p>x</p><!-- /wp:paragraph -->")
        assert len(blocks) == 1
        assert blocks[0].name == "group"
        assert [child.name for child in blocks[0].children] == ["paragraph"]

    def test_closer_implicitly_closes_inner_blocks(self):
        blocks = parse_blocks("<!-- wp:group --><!-- wp:paragraph --><p>x</p><!-- /wp:group --><!-- wp:separator /-->")
        assert [block.name for block in blocks] == ["group", "separator"]
        assert blocks[0].children[0].raw_inner_content == "<p>x</p>"


class TestNesting:
    def test_columns_example(self, columns_blocks):
        assert len(columns_blocks) == 1
        columns = columns_blocks[0]
        assert columns.name == "columns"
        assert [child.name for child in columns.children] == ["column", "column"]
        assert [len(child.children) for child in columns.children] == [1, 1]
        assert columns.children[0].children[0].name == "heading"
        assert columns.children[1].children[0].name == "paragraph"

    def test_same_name_nesting_does_not_close_parent_early(self):
        markup = (
            "<!-- wp:group --><!-- wp:group --><p>a</p><!-- /wp:group -->"
            "<p>b</p><!-- /wp:group -->"
        )
        blocks = parse_blocks(markup)
        assert len(blocks) == 1
        assert len(blocks[0].children) == 1
        assert blocks[0].children[0].raw_inner_content == "<p>a</p>"
        assert "<p>b</p>" in blocks[0].raw_inner_content

    def test_same_name_siblings(self):
        markup = (
            "<!-- wp:column --><!-- wp:paragraph --><p>1</p><!-- /wp:paragraph -->"
            "<!-- wp:paragraph --><p>2</p><!-- /wp:paragraph --><!-- /wp:column -->"
        )
        blocks = parse_blocks(markup)
        assert [child.raw_inner_content for child in blocks[0].children] == ["<p>1</p>", "<p>2</p>"]

    def test_container_inner_content_keeps_child_markup(self, columns_blocks):
        assert "<!-- wp:column -->" in columns_blocks[0].raw_inner_content

    @pytest.mark.parametrize("depth", [1, 2, 3, 4, 5, 8])
    def test_depth_is_truncated_to_max_depth(self, depth):
        max_depth = 3
        blocks = parse_blocks(nested_groups(depth), ParseOptions(max_depth=max_depth))
        assert tree_depth(blocks) == min(depth, max_depth)
        # the excess stays in the deepest recognized block
        leaf = deepest(blocks[0])
        assert "<p>deep</p>" in leaf.raw_inner_content
        assert leaf.raw_inner_content.count("<!-- wp:group -->") == max(depth - max_depth, 0)

    def test_default_max_depth_is_ten(self):
        blocks = parse_blocks(nested_groups(12))
        assert tree_depth(blocks) == 10

    def test_parsing_is_deterministic(self, columns_markup):
        assert parse_blocks(columns_markup) == parse_blocks(columns_markup)


class TestOptions:
    def test_block_types_excludes_subtree(self, columns_markup):
        assert parse_blocks(columns_markup, ParseOptions(block_types={"heading"})) == []

    def test_block_types_filters_children(self, columns_markup):
        blocks = parse_blocks(columns_markup, ParseOptions(block_types={"columns", "column", "core/heading"}))
        columns = blocks[0]
        assert [len(column.children) for column in columns.children] == [1, 0]
        assert columns.children[0].children[0].name == "heading"

    def test_block_types_from_comma_string(self):
        options = ParseOptions(block_types="heading, paragraph")
        assert options.block_types == frozenset({"heading", "paragraph"})

    def test_skip_empty(self):
        markup = (
            "<!-- wp:paragraph --><p>Content</p><!-- /wp:paragraph -->"
            "<!-- wp:separator /-->"
            "<!-- wp:paragraph -->\n<!-- /wp:paragraph -->"
            "<!-- wp:paragraph --><p>More</p><!-- /wp:paragraph -->"
        )
        blocks = parse_blocks(markup, ParseOptions(skip_empty=True))
        assert [block.raw_inner_content for block in blocks] == ["<p>Content</p>", "<p>More</p>"]

    def test_skip_empty_keeps_blocks_with_attributes(self):
        blocks = parse_blocks('<!-- wp:spacer {"height":"20px"} /-->', ParseOptions(skip_empty=True))
        assert len(blocks) == 1


class TestHelpers:
    def test_count_blocks(self, columns_blocks):
        assert count_blocks(columns_blocks) == 5

    def test_has_block_markup(self, columns_markup):
        assert has_block_markup(columns_markup)
        assert not has_block_markup("<p>plain</p>")
        assert not has_block_markup("")

    def test_strip_block_markers(self):
        assert strip_block_markers("<!-- wp:paragraph --><p>x</p><!-- /wp:paragraph -->") == "<p>x</p>"

    def test_attributes_are_always_a_dict(self):
        assert ContentBlock(name="x", attributes=None).attributes == {}
        assert ContentBlock(name="x", attributes=[1, 2]).attributes == {}
