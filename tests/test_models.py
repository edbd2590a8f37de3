"""Tests for request/result models and settings."""
from holiday_webhook.config import Settings
from holiday_webhook.models import Err, ErrorCode, Ok, ParseFailure, WebhookCommand, WebhookReply


def test_no_cache_flag():
    assert WebhookCommand(text="nocache").no_cache is True
    assert WebhookCommand(text="today nocache please").no_cache is True
    assert WebhookCommand(text="today").no_cache is False
    assert WebhookCommand(text=None).no_cache is False
    assert WebhookCommand().no_cache is False


def test_reply_defaults_to_in_channel():
    reply = WebhookReply(text="hi")

    assert reply.response_type == "in_channel"
    assert reply.model_dump(exclude_none=True) == {"response_type": "in_channel", "text": "hi"}


def test_tagged_results():
    ok = Ok("html")
    err = Err(ParseFailure(cause=ValueError("bad")))

    assert ok.is_ok and not ok.is_err
    assert err.is_err and not err.is_ok
    assert err.error.code is ErrorCode.SITE_PARSE


def test_is_production():
    assert Settings(environment="production").is_production is True
    assert Settings(environment="Production ").is_production is True
    assert Settings(environment="development").is_production is False
