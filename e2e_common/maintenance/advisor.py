"""AI-assisted maintenance suggestions over an OpenAI-compatible endpoint."""

import json
import logging
import time

import httpx
import openai
from openai import AsyncOpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from e2e_common.config.settings import AdvisorSettings
from e2e_common.core.exceptions import AdvisorError, AdvisorRateLimitError, AdvisorTimeoutError
from e2e_common.core.models import MaintenanceReport

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a senior QA automation engineer maintaining a Playwright end-to-end "
    "test suite. You receive aggregated error statistics from recent test runs and "
    "suggest concrete fixes: selector changes, waits, test data corrections or "
    "configuration changes. Be specific and brief."
)


def build_prompt(report: MaintenanceReport) -> str:
    """Render the report as the user prompt."""
    stats = {category.value: count for category, count in report.statistics.items() if count}
    top_errors = [
        {
            "code": record.code,
            "title": record.title,
            "details": record.details,
            "location": record.location,
        }
        for record in report.top_errors
    ]
    category = report.most_frequent_category.value if report.most_frequent_category else "none"
    return (
        f"Total errors: {report.total_errors}\n"
        f"Error statistics by category: {json.dumps(stats)}\n"
        f"Most frequent category: {category}\n"
        f"Most recent errors in that category:\n{json.dumps(top_errors, indent=2, default=str)}\n\n"
        "Top Failure Categories: explain the likely root causes, then list prioritized "
        "maintenance actions for the test suite."
    )


class MaintenanceAdvisor:
    """Turns a maintenance report into human-readable suggestions."""

    def __init__(self, settings: AdvisorSettings | None = None, client: AsyncOpenAI | None = None) -> None:
        """Initialize advisor.

        Args:
            settings: Advisor settings (defaults to the environment)
            client: Preconfigured client, mainly for tests

        Raises:
            AdvisorError: If no client is given and no API key is configured
        """
        self.settings = settings or AdvisorSettings.from_env()

        if client is None:
            if not self.settings.api_key:
                raise AdvisorError("OpenAI API key is required (set OPENAI_API_KEY)")
            client = AsyncOpenAI(
                api_key=self.settings.api_key,
                base_url=self.settings.base_url,
                timeout=self.settings.timeout,
            )
        self.client = client

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type((AdvisorRateLimitError, AdvisorTimeoutError)),
        reraise=True,
    )
    async def suggest(self, report: MaintenanceReport) -> str:
        """Ask the model for maintenance suggestions.

        Raises:
            AdvisorRateLimitError: If still rate limited after retries
            AdvisorTimeoutError: If still timing out after retries
            AdvisorError: For any other failure
        """
        if report.total_errors == 0:
            return "No errors recorded; no maintenance needed."

        start_time = time.time()
        try:
            response = await self.client.chat.completions.create(
                model=self.settings.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(report)},
                ],
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as e:
            raise AdvisorTimeoutError(f"Request timed out after {self.settings.timeout}s: {e}")
        except openai.RateLimitError as e:
            raise AdvisorRateLimitError(str(e))
        except Exception as e:
            raise AdvisorError(f"Suggestion request failed: {e}")

        latency_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Maintenance suggestions from {self.settings.model} in {latency_ms}ms")
        return response.choices[0].message.content or ""
