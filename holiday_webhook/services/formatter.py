"""Chat message rendering for a DayRecord."""
from datetime import date
from typing import List, Sequence

from holiday_webhook.models.day_record import DayRecord

# Abbreviated genitive month names as used by the ru-RU "medium" date style
RU_MONTHS_MEDIUM = (
    "янв.",
    "февр.",
    "мар.",
    "апр.",
    "мая",
    "июн.",
    "июл.",
    "авг.",
    "сент.",
    "окт.",
    "нояб.",
    "дек.",
)

SOURCE_ATTRIBUTION = (
    "Праздники взяты с сайта: "
    "[kakoysegodnyaprazdnik.ru](https://kakoysegodnyaprazdnik.ru)"
)


def format_ru_date(day: date) -> str:
    """Format a date like ``16 окт. 2026 г.``."""
    return f"{day.day} {RU_MONTHS_MEDIUM[day.month - 1]} {day.year} г."


def _bullets(items: Sequence[str]) -> List[str]:
    return [f"- {item}" for item in items]


def format_day_message(record: DayRecord, day: date) -> str:
    """
    Render the reply text for a day.

    Every section heading is always present; an empty section simply has no
    bullet lines under it.
    """
    lines = [f"## Праздники {format_ru_date(day)}"]
    lines.extend(_bullets(record.holidays))
    lines.append("### Именины")
    lines.extend(_bullets(record.name_days))
    lines.append("### События в истории")
    lines.extend(_bullets(record.events))
    lines.append(SOURCE_ATTRIBUTION)
    return "\n".join(lines)
