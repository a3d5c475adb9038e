"""Capture a live page with Playwright: its HTML plus rendered element snapshots."""

from contextlib import ExitStack, contextmanager
from typing import Any, Generator
import json
import pathlib

from playwright.sync_api import Browser, Error as PlaywrightError, Page, sync_playwright

from blockport.blocks.models import ElementSnapshot, PageCapture
from blockport.common.errors import CaptureError
from blockport.common.utils.config import get_config
from blockport.common.utils.logger import get_logger

logger = get_logger(__name__)

PYTHON_FILE_DIR = pathlib.Path(__file__).parent.resolve()

INTERNAL_SCRIPT_CODE = (PYTHON_FILE_DIR / "capture.js").read_text()

IIFE_WRAPPER = "(() => {{\n{}\n}})()"


@contextmanager
def browser() -> Generator[Browser, Any, Any]:
    """Context manager for browser lifecycle."""
    playwright = sync_playwright().start()
    try:
        browser_instance = playwright.chromium.launch(headless=True)
        try:
            yield browser_instance
        finally:
            browser_instance.close()
    finally:
        playwright.stop()


@contextmanager
def _pw_page(url: str) -> Generator[Page, Any, Any]:
    """Context manager for creating a page and navigating to URL."""
    with ExitStack() as stack:
        browser_instance = stack.enter_context(browser())
        page = browser_instance.new_page()
        stack.callback(page.close)
        try:
            page.goto(url, wait_until="domcontentloaded", timeout=get_config().capture_timeout_ms)
        except PlaywrightError as e:
            raise CaptureError(f"Could not load {url}: {e}") from e
        page.wait_for_timeout(500)  # stability wait

        yield page


def elements_from_payload(payload: list[dict[str, Any]]) -> list[ElementSnapshot]:
    """Turn the raw capture.js payload into validated snapshots."""
    elements: list[ElementSnapshot] = []
    for item in payload:
        if not isinstance(item, dict) or not item.get("tag"):
            logger.debug("Skipping malformed element payload: %r", item)
            continue
        elements.append(ElementSnapshot.model_validate(item))
    return elements


def _collect_elements(page: Page) -> list[ElementSnapshot]:
    settings = get_config()
    call = f"return collectElements({settings.max_elements}, {json.dumps(settings.skip_tags)});"
    try:
        payload: list[dict[str, Any]] = page.evaluate(IIFE_WRAPPER.format(f"{INTERNAL_SCRIPT_CODE}\n\n{call}"))
    except PlaywrightError as e:
        raise CaptureError(f"Element capture failed on {page.url}: {e}") from e
    return elements_from_payload(payload)


def capture_page(url: str) -> PageCapture:
    """Load a URL headlessly and capture its HTML and element snapshots."""
    logger.info("Capturing %s", url)
    with _pw_page(url) as page:
        html = page.content()
        title = page.title()
        elements = _collect_elements(page)

    logger.info("Captured %d elements from %s", len(elements), url)
    return PageCapture(url=url, title=title, html=html, elements=elements)
