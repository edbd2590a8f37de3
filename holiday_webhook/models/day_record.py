"""Extracted "this day" data and its cache serialization."""
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class DayRecord(BaseModel):
    """Holidays, name-days and historical events for one calendar date."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "holidays": ["Новый год"],
                "nameDays": ["Ивана", "Петра"],
                "events": ["Принят первый закон"],
            }
        },
    )

    holidays: Tuple[str, ...] = Field(default=(), description="Holiday names in document order")
    name_days: Tuple[str, ...] = Field(default=(), alias="nameDays", description="Names celebrating their name-day")
    events: Tuple[str, ...] = Field(default=(), description="Historical events in document order")

    def to_json(self) -> str:
        """Serialize to the cache value format."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, text: str) -> "DayRecord":
        """
        Deserialize a cache value.

        Raises:
            pydantic.ValidationError: If the text is not a serialized DayRecord
        """
        return cls.model_validate_json(text)
