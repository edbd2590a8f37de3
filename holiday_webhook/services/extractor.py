"""
HTML field extraction for kakoysegodnyaprazdnik.ru day pages.

Everything that depends on the site's markup lives here; callers only see
``extract_day_record(html) -> Ok[DayRecord] | Err[ParseFailure]``.
"""
import logging
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup

from holiday_webhook.models.day_record import DayRecord
from holiday_webhook.models.result import Err, Ok, ParseFailure, Result

logger = logging.getLogger(__name__)

# Holidays are published as Q&A answers
HOLIDAY_SELECTOR = (
    '[itemprop="acceptedAnswer"] [itemprop="text"], '
    '[itemprop="suggestedAnswer"] [itemprop="text"]'
)
EVENT_SELECTOR = ".event_block .event"

NAME_DAYS_MARKER = "Именины у"
NAME_SEPARATOR = ", "
EVENT_BULLET = "• "


class EmptyPageError(ValueError):
    """The page contained none of the expected blocks."""


def _select_texts(soup: BeautifulSoup, selector: str) -> List[str]:
    # select() returns matches in document order even for selector lists
    return [" ".join(element.get_text().split()) for element in soup.select(selector)]


def split_name_days(candidates: List[str]) -> Tuple[List[str], List[str]]:
    """
    Separate the name-days entry from holiday candidates.

    Returns:
        Tuple of (holidays, name days). Every candidate containing the marker
        is dropped from holidays; the first one supplies the names.
    """
    marker_entry: Optional[str] = next((c for c in candidates if NAME_DAYS_MARKER in c), None)

    name_days: List[str] = []
    if marker_entry is not None:
        remainder = marker_entry.replace(NAME_DAYS_MARKER, "", 1).strip()
        name_days = [name.strip() for name in remainder.split(NAME_SEPARATOR) if name.strip()]

    holidays = [c for c in candidates if NAME_DAYS_MARKER not in c]
    return holidays, name_days


def strip_event_bullet(text: str) -> str:
    """Remove a leading bullet marker, leaving other strings unchanged."""
    if text.startswith(EVENT_BULLET):
        return text[len(EVENT_BULLET):]
    return text


def extract_day_record(html: str) -> Result[DayRecord, ParseFailure]:
    """
    Parse a day page into a DayRecord.

    Args:
        html: Raw page HTML

    Returns:
        Ok with the record, or Err with a ParseFailure when parsing fails or
        the page has neither holiday nor event blocks
    """
    try:
        soup = BeautifulSoup(html, "html.parser")
        candidates = _select_texts(soup, HOLIDAY_SELECTOR)
        events = [strip_event_bullet(text) for text in _select_texts(soup, EVENT_SELECTOR)]

        if not candidates and not events:
            raise EmptyPageError("no holiday or event blocks found on the page")

        holidays, name_days = split_name_days(candidates)
        record = DayRecord(holidays=holidays, name_days=name_days, events=events)
    except Exception as e:
        logger.error(
            "Failed to extract holidays from page",
            extra={"operation": "extract", "cause": repr(e)},
        )
        return Err(ParseFailure(cause=e))

    logger.debug(
        "Extracted day record",
        extra={
            "holidays": len(record.holidays),
            "name_days": len(record.name_days),
            "events": len(record.events),
        },
    )
    return Ok(record)
