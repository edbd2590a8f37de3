"""Retrieval of the "this day" page from kakoysegodnyaprazdnik.ru."""
import logging
from datetime import date
from typing import Optional

import httpx

from holiday_webhook.models.result import Err, FetchFailure, Ok, Result

logger = logging.getLogger(__name__)

# Transliterated Russian month names used in the site's URLs, January first
MONTH_SLUGS = (
    "yanvar",
    "fevral",
    "mart",
    "aprel",
    "may",
    "iyun",
    "iyul",
    "avgust",
    "sentyabr",
    "oktyabr",
    "noyabr",
    "dekabr",
)

ACCEPT_HEADER = "text/html,application/xhtml+xml,application/xml;"


def build_source_url(target: date, template: str) -> str:
    """
    Fill the page URL template for a calendar date.

    Args:
        target: Date whose page is requested
        template: URL with ``{month}`` and ``{day}`` placeholders

    Returns:
        Page URL, e.g. ``.../baza/yanvar/1``
    """
    return template.format(month=MONTH_SLUGS[target.month - 1], day=target.day)


class ContentFetcher:
    """Fetches raw page HTML over a shared HTTP client."""

    def __init__(self, client: httpx.AsyncClient, url_template: str, timeout: Optional[float] = None):
        self.client = client
        self.url_template = url_template
        self.timeout = timeout

    async def fetch(self, target: date) -> Result[str, FetchFailure]:
        """
        Download the page for ``target``.

        Transport errors, non-2xx responses and undecodable bodies are
        returned as a FetchFailure. Nothing is retried.
        """
        url = build_source_url(target, self.url_template)
        try:
            response = await self.client.get(
                url,
                headers={"Accept": ACCEPT_HEADER},
                timeout=self.timeout,
            )
            response.raise_for_status()
            html = response.text
        except (httpx.HTTPError, UnicodeDecodeError, LookupError) as e:
            logger.error(
                "Failed to fetch holidays page",
                extra={"operation": "fetch", "url": url, "cause": repr(e)},
            )
            return Err(FetchFailure(url=url, cause=e))

        logger.info("Fetched holidays page", extra={"url": url, "size": len(html)})
        return Ok(html)
