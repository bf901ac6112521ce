from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest
from tenacity import wait_none

from e2e_common.config.settings import AdvisorSettings
from e2e_common.core.catalog import ErrorCategory, ErrorCode
from e2e_common.core.exceptions import AdvisorError, AdvisorRateLimitError, AdvisorTimeoutError
from e2e_common.core.models import ErrorRecord, MaintenanceReport
from e2e_common.maintenance.advisor import MaintenanceAdvisor, build_prompt

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _report():
    entry = ErrorCode.ERROR_LOCATOR_NOT_FOUND.entry
    statistics = {category: 0 for category in ErrorCategory}
    statistics[ErrorCategory.ELEMENT] = 2
    return MaintenanceReport(
        statistics=statistics,
        most_frequent_category=ErrorCategory.ELEMENT,
        top_errors=[
            ErrorRecord(
                code=entry.code,
                category=entry.category,
                title=entry.title,
                message=entry.message,
                details={"selector": "#add-to-cart"},
                timestamp=datetime(2024, 5, 1, tzinfo=UTC),
            )
        ],
        total_errors=2,
    )


def _client(content="Update the #add-to-cart selector."):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=response)
    return client


def _rate_limit_error():
    response = httpx.Response(429, request=REQUEST)
    return openai.RateLimitError("Rate limit exceeded", response=response, body=None)


class TestMaintenanceAdvisor:
    """Tests for MaintenanceAdvisor."""

    def test_requires_api_key(self):
        with pytest.raises(AdvisorError, match="API key"):
            MaintenanceAdvisor(AdvisorSettings())

    def test_builds_client_from_settings(self):
        with patch("e2e_common.maintenance.advisor.AsyncOpenAI") as mock_openai:
            advisor = MaintenanceAdvisor(AdvisorSettings(api_key="test-key", base_url="https://llm.internal/v1"))

        mock_openai.assert_called_once_with(api_key="test-key", base_url="https://llm.internal/v1", timeout=60)
        assert advisor.client is mock_openai.return_value

    def test_settings_from_env(self, mock_env_vars, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "gpt-4o")

        settings = AdvisorSettings.from_env()

        assert settings.api_key == "test-openai-key"
        assert settings.model == "gpt-4o"

    @pytest.mark.asyncio
    async def test_suggest(self):
        client = _client()
        advisor = MaintenanceAdvisor(AdvisorSettings(api_key="k"), client=client)

        suggestion = await advisor.suggest(_report())

        assert suggestion == "Update the #add-to-cart selector."
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 2000
        assert kwargs["messages"][0]["role"] == "system"
        assert "#add-to-cart" in kwargs["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_suggest_without_errors_skips_request(self):
        client = _client()
        advisor = MaintenanceAdvisor(AdvisorSettings(api_key="k"), client=client)
        report = MaintenanceReport(statistics={category: 0 for category in ErrorCategory})

        suggestion = await advisor.suggest(report)

        assert "no maintenance needed" in suggestion
        client.chat.completions.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_content(self):
        advisor = MaintenanceAdvisor(AdvisorSettings(api_key="k"), client=_client(content=None))
        assert await advisor.suggest(_report()) == ""

    @pytest.mark.asyncio
    async def test_rate_limit_retries_then_succeeds(self):
        client = _client()
        ok = client.chat.completions.create.return_value
        client.chat.completions.create.side_effect = [_rate_limit_error(), ok]
        advisor = MaintenanceAdvisor(AdvisorSettings(api_key="k"), client=client)

        suggest = MaintenanceAdvisor.suggest.retry_with(wait=wait_none())
        suggestion = await suggest(advisor, _report())

        assert suggestion == "Update the #add-to-cart selector."
        assert client.chat.completions.create.await_count == 2

    @pytest.mark.asyncio
    async def test_rate_limit_gives_up_after_three_attempts(self):
        client = _client()
        client.chat.completions.create.side_effect = _rate_limit_error()
        advisor = MaintenanceAdvisor(AdvisorSettings(api_key="k"), client=client)

        suggest = MaintenanceAdvisor.suggest.retry_with(wait=wait_none())
        with pytest.raises(AdvisorRateLimitError):
            await suggest(advisor, _report())

        assert client.chat.completions.create.await_count == 3

    @pytest.mark.asyncio
    async def test_timeout(self):
        client = _client()
        client.chat.completions.create.side_effect = openai.APITimeoutError(request=REQUEST)
        advisor = MaintenanceAdvisor(AdvisorSettings(api_key="k"), client=client)

        suggest = MaintenanceAdvisor.suggest.retry_with(wait=wait_none())
        with pytest.raises(AdvisorTimeoutError):
            await suggest(advisor, _report())

    @pytest.mark.asyncio
    async def test_other_errors_are_not_retried(self):
        client = _client()
        client.chat.completions.create.side_effect = ValueError("bad payload")
        advisor = MaintenanceAdvisor(AdvisorSettings(api_key="k"), client=client)

        with pytest.raises(AdvisorError, match="bad payload"):
            await advisor.suggest(_report())

        assert client.chat.completions.create.await_count == 1


class TestBuildPrompt:
    def test_includes_statistics_and_top_errors(self):
        prompt = build_prompt(_report())

        assert "Total errors: 2" in prompt
        assert '{"ELEMENT": 2}' in prompt
        assert "Most frequent category: ELEMENT" in prompt
        assert '"code": 2001' in prompt
