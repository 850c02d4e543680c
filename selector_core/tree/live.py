"""
Live page bridge - Playwright

Captures a browser page into an HtmlTree so the engine can work on a
stable snapshot.
"""

import logging

from lxml.etree import ParserError

from ..exceptions import SnapshotError
from .html import HtmlTree

logger = logging.getLogger(__name__)


async def snapshot_page(page) -> HtmlTree:
    """
    Capture the page's current DOM as an HtmlTree.

    Args:
        page: Playwright page

    Returns:
        HtmlTree built from the serialized document
    """
    html = await page.content()
    try:
        tree = HtmlTree.from_html(html)
    except ParserError as e:
        raise SnapshotError(f"Could not parse page content: {e}") from e
    logger.debug(f"Captured snapshot of {page.url} ({len(html)} chars)")
    return tree


async def open_snapshot(url: str, headless: bool = True, timeout_ms: int = 30000) -> HtmlTree:
    """
    Launch Chromium, load ``url`` and return its snapshot.

    Raises:
        SnapshotError: navigation or capture failed
    """
    from playwright.async_api import Error as PlaywrightError
    from playwright.async_api import async_playwright

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=headless)
        try:
            page = await browser.new_page()
            logger.info(f"Loading {url}")
            await page.goto(url, timeout=timeout_ms, wait_until="domcontentloaded")
            return await snapshot_page(page)
        except PlaywrightError as e:
            raise SnapshotError(f"Could not load {url}: {e}") from e
        finally:
            await browser.close()
