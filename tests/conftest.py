"""Shared test fixtures for blockport tests."""

from __future__ import annotations

import pytest

from blockport.blocks import ContentBlock, ElementSnapshot, parse_blocks
from blockport.common.models import Box
from blockport.common.utils import config as config_module

COLUMNS_MARKUP = (
    '<!-- wp:columns --><!-- wp:column --><!-- wp:heading {"level":2} --><h2>A</h2><!-- /wp:heading -->'
    "<!-- /wp:column --><!-- wp:column --><!-- wp:paragraph --><p>B</p><!-- /wp:paragraph -->"
    "<!-- /wp:column --><!-- /wp:columns -->"
)

PAGE_MARKUP = """
<!-- wp:heading {"level":1,"textAlign":"center"} -->
<h1 class="wp-block-heading has-text-align-center">Welcome</h1>
<!-- /wp:heading -->

<!-- wp:paragraph -->
<p>Intro with <strong>bold</strong> text.</p>
<!-- /wp:paragraph -->

<!-- wp:image {"id":12,"sizeSlug":"large"} -->
<figure class="wp-block-image size-large"><img src="https://example.test/hero.jpg" alt="Hero"/><figcaption>Caption</figcaption></figure>
<!-- /wp:image -->

<!-- wp:buttons -->
<div class="wp-block-buttons"><!-- wp:button {"className":"is-style-outline"} -->
<div class="wp-block-button is-style-outline"><a class="wp-block-button__link" href="https://example.test/signup">Sign up</a></div>
<!-- /wp:button --></div>
<!-- /wp:buttons -->

<!-- wp:list {"ordered":true} -->
<ol><!-- wp:list-item --><li>One</li><!-- /wp:list-item --><!-- wp:list-item --><li>Two</li><!-- /wp:list-item --></ol>
<!-- /wp:list -->

<!-- wp:quote -->
<blockquote class="wp-block-quote"><!-- wp:paragraph --><p>Be yourself.</p><!-- /wp:paragraph --><cite>Oscar</cite></blockquote>
<!-- /wp:quote -->

<!-- wp:embed {"url":"https://www.youtube.com/watch?v=abc123","providerNameSlug":"youtube"} -->
<figure class="wp-block-embed"><div class="wp-block-embed__wrapper">https://www.youtube.com/watch?v=abc123</div></figure>
<!-- /wp:embed -->

<!-- wp:separator /-->

<!-- wp:table -->
<figure class="wp-block-table"><table><tr><th>Plan</th><th>Price</th></tr><tr><td>Pro</td><td>$9</td></tr></table></figure>
<!-- /wp:table -->

<!-- wp:acf/testimonial {"id":"block_1"} -->
<div class="testimonial">Great product</div>
<!-- /wp:acf/testimonial -->

<!-- wp:cover {"url":"https://example.test/bg.jpg"} -->
<div class="wp-block-cover"><!-- wp:paragraph --><p>On a background</p><!-- /wp:paragraph --></div>
<!-- /wp:cover -->
"""


def _make_element(
    tag: str,
    text: str = "",
    x: float = 0,
    y: float = 0,
    width: float = 100,
    height: float = 20,
    attributes: dict[str, str] | None = None,
    style: dict[str, str] | None = None,
    visible: bool = True,
) -> ElementSnapshot:
    return ElementSnapshot(
        tag=tag,
        text=text,
        attributes=attributes or {},
        box=Box(x=x, y=y, width=width, height=height),
        style=style or {},
        visible=visible,
    )


@pytest.fixture
def make_element():
    """Factory for ElementSnapshots: tag, text, then x, y, width, height."""
    return _make_element


@pytest.fixture(autouse=True)
def restore_config():
    original = config_module.get_config()
    yield
    config_module.set_config(original)


@pytest.fixture
def columns_markup() -> str:
    return COLUMNS_MARKUP


@pytest.fixture
def columns_blocks() -> list[ContentBlock]:
    return parse_blocks(COLUMNS_MARKUP)


@pytest.fixture
def page_blocks() -> list[ContentBlock]:
    return parse_blocks(PAGE_MARKUP)


@pytest.fixture
def snapshot_elements() -> list[ElementSnapshot]:
    return [
        _make_element("div", "Everything", 0, 0, 800, 2000),
        _make_element("h1", "Title", 0, 0, 800, 40),
        _make_element("p", "Left column", 0, 100, 300, 40),
        _make_element("p", "Right column", 400, 100, 300, 40),
        _make_element("img", "", 0, 300, 400, 200, attributes={"src": "https://example.test/a.png", "alt": "A"}),
        _make_element("img", "", 0, 700, 400, 200, attributes={"src": "https://example.test/a.png"}),
        _make_element("script", "var x = 1;", 0, 900, 10, 10),
        _make_element("blockquote", "Quoted", 0, 1000, 800, 100),
        _make_element("p", "Quoted", 10, 1010, 700, 30),
    ]
