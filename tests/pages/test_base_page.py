import re
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeout

from e2e_common.config.settings import HarnessSettings
from e2e_common.core.catalog import ErrorCategory, ErrorCode
from e2e_common.core.exceptions import ClassifiedError
from e2e_common.pages.base_page import BasePage


@pytest.fixture
def settings(results_dir):
    return HarnessSettings(
        base_url="https://www.saucedemo.com",
        api_base_url="https://api.saucedemo.com/qa",
        test_results_dir=results_dir,
    )


@pytest.fixture
def locator():
    loc = MagicMock()
    for name in ("click", "fill", "is_visible", "wait_for", "inner_text", "select_option"):
        setattr(loc, name, AsyncMock())
    return loc


@pytest.fixture
def page(mock_page, locator):
    mock_page.goto = AsyncMock()
    mock_page.wait_for_load_state = AsyncMock()
    mock_page.locator = MagicMock(return_value=locator)
    return mock_page


@pytest.fixture
def base_page(page, settings):
    return BasePage(page, settings=settings)


@pytest.fixture
def mock_expect():
    assertions = MagicMock()
    for name in ("to_contain_text", "to_be_visible", "to_have_count", "to_have_url", "to_have_title"):
        setattr(assertions, name, AsyncMock())
    with patch("e2e_common.pages.base_page.expect", return_value=assertions) as expect:
        yield expect, assertions


def _records(base_page):
    return base_page.error_reporting.scan_records().records


class TestNavigation:
    @pytest.mark.asyncio
    async def test_navigate_joins_base_url(self, base_page, page):
        await base_page.navigate("/inventory.html")

        page.goto.assert_awaited_once_with("https://www.saucedemo.com/inventory.html")
        assert _records(base_page) == []

    @pytest.mark.asyncio
    async def test_navigate_timeout(self, base_page, page):
        page.goto.side_effect = PlaywrightTimeout("Timeout 30000ms exceeded")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.navigate("/cart.html")

        assert exc_info.value.code == ErrorCode.ERROR_PAGE_NOT_LOADED.code
        [record] = _records(base_page)
        assert record.details["path"] == "/cart.html"
        assert record.details["base_url"] == "https://www.saucedemo.com"
        assert record.details["action"] == "navigate"

    @pytest.mark.asyncio
    async def test_navigate_failure(self, base_page, page):
        page.goto.side_effect = RuntimeError("net::ERR_NAME_NOT_RESOLVED")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.navigate()

        assert exc_info.value.code == ErrorCode.ERROR_NAVIGATION_FAILED.code
        assert exc_info.value.record.details["error"] == "net::ERR_NAME_NOT_RESOLVED"

    @pytest.mark.asyncio
    async def test_wait_for_navigation(self, base_page, page):
        await base_page.wait_for_navigation()
        page.wait_for_load_state.assert_awaited_once_with("networkidle")


class TestActions:
    @pytest.mark.asyncio
    async def test_click(self, base_page, page, locator):
        await base_page.click("#login-button")

        page.locator.assert_called_with("#login-button")
        locator.click.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_click_timeout_reports_once_and_raises(self, base_page, locator):
        locator.click.side_effect = PlaywrightTimeout("Timeout 30000ms exceeded")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.click("#login-button")

        assert exc_info.value.code == 2007
        [record] = _records(base_page)
        assert record.details["selector"] == "#login-button"
        assert record.screenshot is not None

    @pytest.mark.asyncio
    async def test_click_not_clickable(self, base_page, locator):
        locator.click.side_effect = RuntimeError("Element is outside of the viewport")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.click("#hidden")

        assert exc_info.value.code == ErrorCode.ERROR_ELEMENT_NOT_CLICKABLE.code

    @pytest.mark.asyncio
    async def test_fill(self, base_page, locator):
        await base_page.fill("#user-name", "standard_user")
        locator.fill.assert_awaited_once_with("standard_user")

    @pytest.mark.asyncio
    async def test_fill_failure(self, base_page, locator):
        locator.fill.side_effect = RuntimeError("Element is not an <input>")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.fill("#user-name", "standard_user")

        assert exc_info.value.code == ErrorCode.ERROR_ELEMENT_NOT_VISIBLE.code
        assert exc_info.value.record.details["value"] == "standard_user"

    @pytest.mark.asyncio
    async def test_is_visible(self, base_page, locator):
        locator.is_visible.return_value = True
        assert await base_page.is_visible(".inventory_list") is True

    @pytest.mark.asyncio
    async def test_is_visible_failure_returns_false(self, base_page, locator):
        locator.is_visible.side_effect = RuntimeError("Target closed")

        assert await base_page.is_visible(".inventory_list") is False

        [record] = _records(base_page)
        assert record.code == ErrorCode.ERROR_LOCATOR_NOT_FOUND.code

    @pytest.mark.asyncio
    async def test_wait_for_element(self, base_page, locator):
        await base_page.wait_for_element(".cart_list", timeout=5000)
        locator.wait_for.assert_awaited_once_with(state="visible", timeout=5000)

    @pytest.mark.asyncio
    async def test_wait_for_element_timeout(self, base_page, locator):
        locator.wait_for.side_effect = PlaywrightTimeout("Timeout 5000ms exceeded")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.wait_for_element(".cart_list", timeout=5000)

        assert exc_info.value.code == ErrorCode.ERROR_ELEMENT_TIMEOUT.code
        assert exc_info.value.record.details["timeout"] == 5000

    @pytest.mark.asyncio
    async def test_get_text(self, base_page, locator):
        locator.inner_text.return_value = "Products"
        assert await base_page.get_text(".title") == "Products"

    @pytest.mark.asyncio
    async def test_get_text_failure_returns_empty(self, base_page, locator):
        locator.inner_text.side_effect = PlaywrightTimeout("Timeout")

        assert await base_page.get_text(".title") == ""
        assert _records(base_page)[0].code == ErrorCode.ERROR_ELEMENT_TIMEOUT.code

    @pytest.mark.asyncio
    async def test_select_option_failure(self, base_page, locator):
        locator.select_option.side_effect = RuntimeError("Element is disabled")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.select_option(".product_sort_container", "za")

        assert exc_info.value.code == ErrorCode.ERROR_ELEMENT_WRONG_STATE.code

    @pytest.mark.asyncio
    async def test_take_screenshot(self, base_page, results_dir):
        path = await base_page.take_screenshot("checkout")

        assert path == results_dir / "screenshots" / "checkout.png"
        assert path.exists()


class TestAssertions:
    @pytest.mark.asyncio
    async def test_expect_text_passes(self, base_page, mock_expect, locator):
        expect, assertions = mock_expect

        await base_page.expect_text_to_contain(".title", "Products")

        expect.assert_called_once_with(locator)
        assertions.to_contain_text.assert_awaited_once_with("Products")

    @pytest.mark.asyncio
    async def test_expect_text_failure(self, base_page, mock_expect):
        _, assertions = mock_expect
        assertions.to_contain_text.side_effect = AssertionError("Locator expected to contain text")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.expect_text_to_contain(".title", "Products")

        assert exc_info.value.category == ErrorCategory.ASSERTION
        assert exc_info.value.code == ErrorCode.ERROR_ASSERTION_TEXT.code
        assert exc_info.value.record.details["expected_text"] == "Products"

    @pytest.mark.asyncio
    async def test_expect_to_be_visible_failure(self, base_page, mock_expect):
        _, assertions = mock_expect
        assertions.to_be_visible.side_effect = AssertionError("not visible")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.expect_to_be_visible(".inventory_list")

        assert exc_info.value.code == ErrorCode.ERROR_ASSERTION_VISIBILITY.code

    @pytest.mark.asyncio
    async def test_expect_count_failure(self, base_page, mock_expect):
        _, assertions = mock_expect
        assertions.to_have_count.side_effect = AssertionError("count mismatch")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.expect_count(".inventory_item", 6)

        assert exc_info.value.code == ErrorCode.ERROR_ASSERTION_COUNT.code
        assert exc_info.value.record.details["expected_count"] == 6

    @pytest.mark.asyncio
    async def test_expect_url_failure(self, base_page, mock_expect, page):
        expect, assertions = mock_expect
        assertions.to_have_url.side_effect = AssertionError("url mismatch")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.expect_url(re.compile(r".*/cart\.html"))

        expect.assert_called_once_with(page)
        details = exc_info.value.record.details
        assert exc_info.value.code == ErrorCode.ERROR_URL_MISMATCH.code
        assert details["expected_url"] == r".*/cart\.html"
        assert details["actual_url"] == "https://www.saucedemo.com/inventory.html"

    @pytest.mark.asyncio
    async def test_expect_title_failure(self, base_page, mock_expect):
        _, assertions = mock_expect
        assertions.to_have_title.side_effect = AssertionError("title mismatch")

        with pytest.raises(ClassifiedError) as exc_info:
            await base_page.expect_title("Checkout")

        details = exc_info.value.record.details
        assert exc_info.value.code == ErrorCode.ERROR_ASSERTION_PROPERTY.code
        assert details["expected_title"] == "Checkout"
        assert details["actual_title"] == "Swag Labs"


class TestDirectReporting:
    @pytest.mark.asyncio
    async def test_report_error(self, base_page):
        record = await base_page.report_error(ErrorCode.ERROR_VISUAL_MISMATCH, {"diff": 0.2})

        assert record.code == 8001
        assert record.location.startswith("URL: https://www.saucedemo.com/inventory.html")

    @pytest.mark.asyncio
    async def test_handle_error_without_throw(self, base_page):
        record = await base_page.handle_error(ErrorCode.ERROR_INVALID_DATA, {"field": "zip"}, throw_error=False)

        assert record.category == ErrorCategory.DATA
        assert len(_records(base_page)) == 1

    @pytest.mark.asyncio
    async def test_handle_error_throws(self, base_page):
        with pytest.raises(ClassifiedError):
            await base_page.handle_error(ErrorCode.ERROR_INVALID_DATA, {"field": "zip"})

    def test_shared_reporter(self, page, settings, reporter):
        base_page = BasePage(page, settings=settings, reporter=reporter)

        assert base_page.error_reporting is reporter
        assert base_page.error_handler.reporter is reporter
        assert base_page.base_url == "https://www.saucedemo.com"
