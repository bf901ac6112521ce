import logging
import re
from pathlib import Path
from typing import Any
from urllib.parse import urljoin

from playwright.async_api import Locator, Page, expect

from e2e_common.config.settings import HarnessSettings, load_settings
from e2e_common.core.catalog import ErrorCode, ErrorCodeEntry
from e2e_common.core.models import ErrorRecord
from e2e_common.errors.classification import classify_failure
from e2e_common.errors.handler import ErrorHandler
from e2e_common.errors.reporter import ErrorReporter

logger = logging.getLogger(__name__)


class BasePage:
    """Base page object; application page objects extend this class.

    Every action funnels failures through the error handler. Actions with no
    meaningful fallback (navigation, clicks, fills, waits, assertions) report
    and raise ClassifiedError; ``is_visible`` and ``get_text`` report and
    return ``False`` / ``""``.
    """

    def __init__(
        self,
        page: Page,
        settings: HarnessSettings | None = None,
        reporter: ErrorReporter | None = None,
    ):
        self.page = page
        self.settings = settings or load_settings()
        self.base_url = self.settings.base_url
        self.error_reporting = reporter or ErrorReporter(
            page,
            results_dir=self.settings.test_results_dir,
            settings=self.settings.error_reporting,
        )
        self.error_handler = ErrorHandler(self.error_reporting)

    async def _fail(self, exc: BaseException, action: str, throw: bool = True, **details: Any) -> ErrorRecord:
        entry = classify_failure(exc, action)
        payload = {**details, "error": str(exc), "action": action}
        return await self.error_handler.handle(entry, payload, throw_after_report=throw)

    async def navigate(self, path: str = "/") -> None:
        """Navigate to a path relative to the base URL (absolute URLs pass through)."""
        url = urljoin(self.base_url, path)
        logger.info(f"Navigating to {url}")
        try:
            await self.page.goto(url)
        except Exception as e:
            await self._fail(e, "navigate", path=path, base_url=self.base_url)

    async def wait_for_navigation(self) -> None:
        await self.page.wait_for_load_state("networkidle")

    def get_locator(self, selector: str) -> Locator:
        return self.page.locator(selector)

    async def click(self, selector: str) -> None:
        try:
            await self.get_locator(selector).click()
        except Exception as e:
            await self._fail(e, "click", selector=selector)

    async def fill(self, selector: str, value: str) -> None:
        try:
            await self.get_locator(selector).fill(value)
        except Exception as e:
            await self._fail(e, "fill", selector=selector, value=value)

    async def is_visible(self, selector: str) -> bool:
        """Report-only: returns False when the check itself fails."""
        try:
            return await self.get_locator(selector).is_visible()
        except Exception as e:
            await self._fail(e, "is_visible", throw=False, selector=selector)
            return False

    async def wait_for_element(self, selector: str, timeout: float | None = None) -> None:
        """Wait for an element to be visible (timeout in milliseconds)."""
        try:
            await self.get_locator(selector).wait_for(state="visible", timeout=timeout)
        except Exception as e:
            await self._fail(e, "wait_for_element", selector=selector, timeout=timeout)

    async def get_text(self, selector: str) -> str:
        """Report-only: returns an empty string when the read fails."""
        try:
            return await self.get_locator(selector).inner_text()
        except Exception as e:
            await self._fail(e, "get_text", throw=False, selector=selector)
            return ""

    async def select_option(self, selector: str, value: str) -> None:
        try:
            await self.get_locator(selector).select_option(value)
        except Exception as e:
            await self._fail(e, "select_option", selector=selector, value=value)

    async def take_screenshot(self, name: str) -> Path:
        path = self.settings.test_results_dir / "screenshots" / f"{name}.png"
        path.parent.mkdir(parents=True, exist_ok=True)
        await self.page.screenshot(path=str(path))
        return path

    async def expect_text_to_contain(self, selector: str, text: str) -> None:
        try:
            await expect(self.get_locator(selector)).to_contain_text(text)
        except Exception as e:
            await self._fail(e, "expect_text_to_contain", selector=selector, expected_text=text)

    async def expect_to_be_visible(self, selector: str) -> None:
        try:
            await expect(self.get_locator(selector)).to_be_visible()
        except Exception as e:
            await self._fail(e, "expect_to_be_visible", selector=selector)

    async def expect_count(self, selector: str, count: int) -> None:
        try:
            await expect(self.get_locator(selector)).to_have_count(count)
        except Exception as e:
            await self._fail(e, "expect_count", selector=selector, expected_count=count)

    async def expect_url(self, url_pattern: str | re.Pattern) -> None:
        try:
            await expect(self.page).to_have_url(url_pattern)
        except Exception as e:
            await self._fail(
                e,
                "expect_url",
                expected_url=_pattern_text(url_pattern),
                actual_url=self.page.url,
            )

    async def expect_title(self, title: str | re.Pattern) -> None:
        try:
            await expect(self.page).to_have_title(title)
        except Exception as e:
            try:
                current_title = await self.page.title()
            except Exception:
                current_title = None
            await self._fail(
                e,
                "expect_title",
                expected_title=_pattern_text(title),
                actual_title=current_title,
            )

    async def report_error(
        self,
        error_code: ErrorCode | ErrorCodeEntry,
        details: Any = None,
        screenshot_name: str | None = None,
    ) -> ErrorRecord:
        """Report an error with the current page context."""
        return await self.error_reporting.report(error_code, details, screenshot_name)

    async def handle_error(
        self,
        error_code: ErrorCode | ErrorCodeEntry,
        details: Any = None,
        throw_error: bool = True,
    ) -> ErrorRecord:
        """Report an error and raise ClassifiedError unless ``throw_error`` is False."""
        return await self.error_handler.handle(error_code, details, throw_after_report=throw_error)


def _pattern_text(pattern: str | re.Pattern) -> str:
    if isinstance(pattern, re.Pattern):
        return pattern.pattern
    return pattern
