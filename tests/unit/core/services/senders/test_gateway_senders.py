"""Unit tests for the HTTP gateway senders."""

import json

import pytest
import requests
import responses

from core.enums.notification import Channel, Topic
from core.services.senders import PushChannelSender, SmsChannelSender

SMS_URL = "https://sms.test/messages"
PUSH_URL = "https://push.test/notify"


@responses.activate
def test_sms_success_returns_provider_id():
    """Test that a 2xx reply is a sent result carrying the message ID."""
    responses.add(
        responses.POST, SMS_URL, json={"message_id": "sms-991"}, status=202
    )
    sender = SmsChannelSender(base_url=SMS_URL, api_key="key-1", timeout=2.0)

    result = sender.send("+15551234", Topic.UPDATES, {"body": "Order shipped"})

    assert result.success
    assert result.provider_message_id == "sms-991"
    call = responses.calls[0]
    assert call.request.headers["Authorization"] == "Bearer key-1"
    assert json.loads(call.request.body) == {
        "to": "+15551234",
        "text": "Order shipped",
        "topic": "updates",
    }


@responses.activate
def test_sms_server_error_is_failed_result():
    """Test that a 5xx reply is a failed result with the status."""
    responses.add(responses.POST, SMS_URL, body="upstream down", status=503)
    sender = SmsChannelSender(base_url=SMS_URL)

    result = sender.send("+15551234", Topic.UPDATES, {})

    assert not result.success
    assert "503" in result.failure_reason


@responses.activate
def test_sms_client_error_is_failed_result():
    """Test that a 4xx reply is a failed result."""
    responses.add(responses.POST, SMS_URL, json={"error": "bad number"}, status=400)

    result = SmsChannelSender(base_url=SMS_URL).send("+1", Topic.UPDATES, {})

    assert not result.success
    assert "400" in result.failure_reason


@responses.activate
def test_connection_error_is_failed_result():
    """Test that transport errors are reported, not raised."""
    responses.add(
        responses.POST, PUSH_URL, body=requests.ConnectionError("refused")
    )

    result = PushChannelSender(base_url=PUSH_URL).send("tok", Topic.UPDATES, {})

    assert not result.success
    assert "unreachable" in result.failure_reason


@responses.activate
def test_request_timeout_is_failed_result():
    """Test that a gateway timeout is reported as a failed result."""
    responses.add(responses.POST, PUSH_URL, body=requests.Timeout("slow"))

    result = PushChannelSender(base_url=PUSH_URL).send("tok", Topic.UPDATES, {})

    assert not result.success
    assert "timed out" in result.failure_reason


@responses.activate
def test_push_payload_carries_title_body_and_data():
    """Test the push payload layout."""
    responses.add(responses.POST, PUSH_URL, body="", status=200)
    sender = PushChannelSender(base_url=PUSH_URL)

    result = sender.send(
        "device-1",
        Topic.MARKETING,
        {"subject": "Sale", "body": "50% off", "campaign": "fall"},
    )

    assert result.success
    assert result.provider_message_id is None
    assert json.loads(responses.calls[0].request.body) == {
        "device_token": "device-1",
        "title": "Sale",
        "body": "50% off",
        "data": {"topic": "marketing", "campaign": "fall"},
    }


@pytest.mark.parametrize(
    "sender_class, channel",
    [(SmsChannelSender, Channel.SMS), (PushChannelSender, Channel.PUSH)],
)
def test_unconfigured_gateway_fails_without_request(sender_class, channel):
    """Test that an empty gateway URL fails without any HTTP call."""
    sender = sender_class(base_url="")

    with responses.RequestsMock() as rsps:
        result = sender.send("addr", Topic.UPDATES, {})
        assert len(rsps.calls) == 0

    assert sender.channel == channel
    assert not result.success
    assert "not configured" in result.failure_reason
