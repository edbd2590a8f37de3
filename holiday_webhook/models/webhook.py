"""Slash-command webhook request and reply models."""
from typing import Optional
from pydantic import BaseModel, Field


NO_CACHE_TOKEN = "nocache"


class WebhookCommand(BaseModel):
    """Body posted by the chat platform."""

    text: Optional[str] = Field(None, description="Command arguments typed by the user")

    @property
    def no_cache(self) -> bool:
        return bool(self.text) and NO_CACHE_TOKEN in self.text


class WebhookReply(BaseModel):
    """Reply rendered back into the channel."""

    response_type: str = Field(default="in_channel", description="Visibility of the reply")
    text: str = Field(..., description="Markdown message body")
    icon_url: Optional[str] = Field(None, description="Avatar shown next to the reply")
