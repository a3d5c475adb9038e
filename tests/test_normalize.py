"""Tests for shared value normalization."""

import pytest

from blockport.common.models import Spacing
from blockport.common.utils.normalize import (
    detect_video_provider,
    escape_html,
    expand_spacing,
    extract_background_image,
    extract_image_src,
    extract_link_href,
    inner_html,
    parse_color,
    resolve_alignment,
    strip_html,
)


class TestParseColor:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("#fff", "#FFF"),
            ("#1a2b3c", "#1A2B3C"),
            ("rgb(255, 0, 0)", "#FF0000"),
            ("rgba(0, 128, 255, 0.5)", "#0080FF"),
            ("rgb(0 0 0)", "#000000"),
            ("transparent", ""),
            ("inherit", ""),
            ("rgba(0, 0, 0, 0)", ""),
            ("rgba(10, 20, 30, 0)", "#0A141E"),
            ("", ""),
            (None, ""),
            ("red", "red"),
            ("none", "none"),
            ("currentColor", "currentColor"),
        ],
    )
    def test_normalization(self, value, expected):
        assert parse_color(value) == expected


class TestResolveAlignment:
    def test_attribute_wins_over_style(self):
        assert resolve_alignment({"textAlign": "center"}, {"text-align": "right"}) == "center"

    def test_non_text_align_attribute_is_ignored(self):
        assert resolve_alignment({"align": "wide"}, {"text-align": "right"}) == "right"

    def test_css_aliases(self):
        assert resolve_alignment({}, {"text-align": "start"}) == "left"
        assert resolve_alignment({}, {"text-align": "-webkit-center"}) == "center"

    def test_falls_back_to_configured_default(self):
        assert resolve_alignment() == "left"
        assert resolve_alignment({}, {}, default="justify") == "justify"


class TestExpandSpacing:
    def test_single_value(self):
        assert expand_spacing("10px") == Spacing(top="10", right="10", bottom="10", left="10", units=("px",) * 4)

    def test_two_values(self):
        spacing = expand_spacing("10px 20px")
        assert (spacing.top, spacing.right, spacing.bottom, spacing.left) == ("10", "20", "10", "20")

    def test_three_values(self):
        spacing = expand_spacing("1em 2em 3em")
        assert (spacing.top, spacing.right, spacing.bottom, spacing.left) == ("1", "2", "3", "2")
        assert spacing.unit == "em"

    def test_four_values(self):
        spacing = expand_spacing("1px 2px 3px 4px")
        assert (spacing.top, spacing.right, spacing.bottom, spacing.left) == ("1", "2", "3", "4")

    def test_mapping(self):
        spacing = expand_spacing({"top": "5px", "left": "8px"})
        assert (spacing.top, spacing.right, spacing.bottom, spacing.left) == ("5", "0", "0", "8")
        assert spacing.unit == "px"

    def test_missing_value_is_zero(self):
        assert expand_spacing(None).is_zero
        assert expand_spacing("").is_zero

    def test_css(self):
        assert expand_spacing("0 20px").css() == "0 20px 0 20px"

    def test_mixed_units_keep_their_side(self):
        spacing = expand_spacing("1em 10px")
        assert spacing.css() == "1em 10px 1em 10px"
        assert spacing.units == ("em", "px", "em", "px")
        assert spacing.is_mixed
        assert spacing.unit == "em"

    def test_unitless_side_borrows_first_unit(self):
        spacing = expand_spacing("2rem 4")
        assert spacing.css() == "2rem 4rem 2rem 4rem"
        assert not spacing.is_mixed

    def test_mixed_units_in_mapping(self):
        spacing = expand_spacing({"top": "5%", "right": "12px"})
        assert spacing.length("top") == "5%"
        assert spacing.length("right") == "12px"
        assert spacing.length("bottom") == "0"


class TestHtmlHelpers:
    def test_escape_html(self):
        assert escape_html('<a href="x">Tom & Jerry\'s</a>') == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#039;s&lt;/a&gt;"
        )

    def test_escape_empty(self):
        assert escape_html(None) == ""

    def test_strip_html(self):
        assert strip_html("<p>Hello   <b>world</b></p>") == "Hello world"

    def test_inner_html(self):
        assert inner_html("<h2>My <em>Title</em></h2>", "h2") == "My <em>Title</em>"
        assert inner_html("plain text", "h2") == "plain text"

    def test_extract_image_src(self):
        assert extract_image_src('<figure><img src="a.jpg" alt="A"/></figure>') == "a.jpg"
        assert extract_image_src("<p>none</p>") == ""

    def test_extract_link_href(self):
        assert extract_link_href('<div><a href="https://example.test">Go</a></div>') == "https://example.test"

    def test_extract_background_image(self):
        assert extract_background_image('url("https://example.test/bg.png")') == "https://example.test/bg.png"
        assert extract_background_image("url(bg.png)") == "bg.png"
        assert extract_background_image("none") == ""


class TestVideoProvider:
    @pytest.mark.parametrize(
        "url, provider",
        [
            ("https://www.youtube.com/watch?v=abc", "youtube"),
            ("https://youtu.be/abc", "youtube"),
            ("https://vimeo.com/12345", "vimeo"),
            ("https://example.test/movie.mp4", "hosted"),
            ("", "hosted"),
        ],
    )
    def test_provider(self, url, provider):
        assert detect_video_provider(url) == provider
