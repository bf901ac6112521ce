import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from playwright.async_api import Page, async_playwright

from e2e_common.config.settings import HarnessSettings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def launch_page(
    settings: HarnessSettings,
    storage_state: str | None = None,
) -> AsyncIterator[Page]:
    """Launch Chromium configured from settings and yield a fresh page.

    The browser and the Playwright driver are always shut down on exit.
    """
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=settings.headless,
            slow_mo=settings.slow_mo_ms,
        )
        try:
            context_options = {
                "viewport": {"width": settings.viewport.width, "height": settings.viewport.height},
                "base_url": settings.base_url,
                "ignore_https_errors": True,
            }
            if storage_state and Path(storage_state).exists():
                context_options["storage_state"] = storage_state
                logger.info(f"Using storage state: {storage_state}")

            context = await browser.new_context(**context_options)
            context.set_default_timeout(settings.timeout_ms)

            page = await context.new_page()
            logger.info(f"Browser ready for {settings.app}/{settings.env} ({settings.base_url})")
            yield page
        finally:
            await browser.close()
