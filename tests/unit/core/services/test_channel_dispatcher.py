"""Unit tests for ChannelDispatcher."""

import threading
import time
from unittest.mock import patch

from django.test import TestCase

from core.enums.notification import Channel, DispatchOutcome, Topic
from core.exceptions import (
    InvalidChannelError,
    InvalidTopicError,
    UserNotFoundError,
)
from core.models import ChannelResult, DispatchAttempt, PreferenceRecord
from core.services.channel_dispatcher import ChannelDispatcher, get_channel_dispatcher
from core.services.senders import (
    EmailChannelSender,
    PushChannelSender,
    SmsChannelSender,
)
from tests.mocks import FakeChannelSender, create_preference_record, fake_senders


def results_by_channel(attempt):
    """Map channel name to its ChannelResult."""
    return {result.channel: result for result in attempt.results.all()}


class TestChannelDispatcher(TestCase):
    """Test cases for ChannelDispatcher.dispatch."""

    def setUp(self):
        """Set up test fixtures."""
        self.record = create_preference_record()
        self.senders = fake_senders()
        self.dispatcher = ChannelDispatcher(self.senders, timeout_seconds=2.0)

    def test_all_channels_sent(self):
        """Test that every enabled channel is attempted and sent."""
        attempt = self.dispatcher.dispatch("user-1", Topic.UPDATES)

        self.assertEqual(attempt.overall_status, DispatchOutcome.ALL_SENT)
        results = results_by_channel(attempt)
        self.assertEqual(set(results), {"email", "sms", "push"})
        for result in results.values():
            self.assertEqual(result.status, "sent")
            self.assertIsNotNone(result.sent_at)
            self.assertIsNone(result.failure_reason)

    def test_senders_receive_channel_addresses(self):
        """Test that each sender gets the address for its channel."""
        self.dispatcher.dispatch("user-1", "updates", metadata={"subject": "Hi"})

        self.assertEqual(
            self.senders[Channel.EMAIL].calls[0]["address"], "user1@example.com"
        )
        self.assertEqual(
            self.senders[Channel.SMS].calls[0]["address"], "+4915112345678"
        )
        self.assertEqual(
            self.senders[Channel.PUSH].calls[0]["address"], "device-token-1"
        )
        self.assertEqual(
            self.senders[Channel.EMAIL].calls[0]["metadata"], {"subject": "Hi"}
        )
        self.assertEqual(self.senders[Channel.SMS].calls[0]["topic"], Topic.UPDATES)

    def test_email_sent_and_sms_failed_is_partial_failure(self):
        """One success and one failure yields exactly two results."""
        self.senders[Channel.SMS] = FakeChannelSender(
            Channel.SMS, succeed=False, failure_reason="Gateway returned 503"
        )
        dispatcher = ChannelDispatcher(self.senders, timeout_seconds=2.0)

        attempt = dispatcher.dispatch(
            "user-1", Topic.UPDATES, requested_channels=["email", "sms"]
        )

        self.assertEqual(attempt.overall_status, DispatchOutcome.PARTIAL_FAILURE)
        results = results_by_channel(attempt)
        self.assertEqual(len(results), 2)
        self.assertEqual(results["email"].status, "sent")
        self.assertEqual(results["sms"].status, "failed")
        self.assertEqual(results["sms"].failure_reason, "Gateway returned 503")
        self.assertIsNone(results["sms"].sent_at)

    def test_all_channels_failed(self):
        """Test that every failing sender yields ALL_FAILED."""
        senders = {
            channel: FakeChannelSender(channel, succeed=False) for channel in Channel
        }
        attempt = ChannelDispatcher(senders, timeout_seconds=2.0).dispatch(
            "user-1", Topic.NEWSLETTER
        )

        self.assertEqual(attempt.overall_status, DispatchOutcome.ALL_FAILED)
        self.assertEqual(attempt.results.count(), 3)

    def test_frequency_never_suppresses_without_calling_senders(self):
        """Test that a never-frequency user gets a zero-channel attempt."""
        PreferenceRecord.objects.filter(user_id="user-1").update(frequency="never")

        attempt = self.dispatcher.dispatch("user-1", Topic.UPDATES)

        self.assertEqual(attempt.overall_status, DispatchOutcome.SUPPRESSED)
        self.assertEqual(attempt.results.count(), 0)
        self.assertTrue(
            DispatchAttempt.objects.filter(attempt_id=attempt.attempt_id).exists()
        )
        for sender in self.senders.values():
            self.assertEqual(sender.calls, [])

    def test_opted_out_topic_is_suppressed(self):
        """Test that an opted-out topic is logged as suppressed."""
        PreferenceRecord.objects.filter(user_id="user-1").update(
            topics={"marketing": False, "newsletter": True, "updates": True}
        )

        attempt = self.dispatcher.dispatch("user-1", Topic.MARKETING)

        self.assertEqual(attempt.overall_status, DispatchOutcome.SUPPRESSED)

    def test_requested_channels_keep_order_and_drop_duplicates(self):
        """Test that requested channels are stored de-duplicated in order."""
        attempt = self.dispatcher.dispatch(
            "user-1", Topic.UPDATES, requested_channels=["push", "email", "push"]
        )

        self.assertEqual(attempt.requested_channels, ["push", "email"])
        self.assertEqual(set(results_by_channel(attempt)), {"push", "email"})
        self.assertEqual(self.senders[Channel.SMS].calls, [])
        self.assertEqual(len(self.senders[Channel.PUSH].calls), 1)

    def test_requested_disabled_channel_is_not_attempted(self):
        """Test that a requested channel the user disabled is skipped."""
        PreferenceRecord.objects.filter(user_id="user-1").update(
            channels={"email": True, "sms": False, "push": False}
        )

        attempt = self.dispatcher.dispatch(
            "user-1", Topic.UPDATES, requested_channels=["sms"]
        )

        self.assertEqual(attempt.overall_status, DispatchOutcome.SUPPRESSED)
        self.assertEqual(attempt.requested_channels, ["sms"])

    def test_unknown_user_raises_and_writes_nothing(self):
        """Test that an unknown user aborts before any log entry."""
        with self.assertRaises(UserNotFoundError):
            self.dispatcher.dispatch("nobody", Topic.UPDATES)

        self.assertEqual(DispatchAttempt.objects.count(), 0)

    def test_invalid_topic_raises_and_writes_nothing(self):
        """Test that an unknown topic is rejected before lookup."""
        with self.assertRaises(InvalidTopicError):
            self.dispatcher.dispatch("user-1", "promotions")

        self.assertEqual(DispatchAttempt.objects.count(), 0)

    def test_invalid_topic_checked_before_user(self):
        """Test that topic validation wins over an unknown user."""
        with self.assertRaises(InvalidTopicError):
            self.dispatcher.dispatch("nobody", "promotions")

    def test_invalid_channel_raises_and_writes_nothing(self):
        """Test that an unknown channel is rejected with every bad value."""
        with self.assertRaises(InvalidChannelError) as ctx:
            self.dispatcher.dispatch(
                "user-1", Topic.UPDATES, requested_channels=["email", "fax", "pager"]
            )

        self.assertEqual(ctx.exception.channels, ["fax", "pager"])
        self.assertEqual(DispatchAttempt.objects.count(), 0)

    def test_sender_exception_is_recorded_as_failure(self):
        """Test that a raising sender becomes a failed result, not an error."""
        self.senders[Channel.PUSH] = FakeChannelSender(
            Channel.PUSH, raises=ConnectionError("push gateway unreachable")
        )
        dispatcher = ChannelDispatcher(self.senders, timeout_seconds=2.0)

        attempt = dispatcher.dispatch("user-1", Topic.UPDATES)

        results = results_by_channel(attempt)
        self.assertEqual(results["push"].status, "failed")
        self.assertEqual(results["push"].failure_reason, "push gateway unreachable")
        self.assertEqual(attempt.overall_status, DispatchOutcome.PARTIAL_FAILURE)

    def test_slow_sender_times_out(self):
        """Test that a sender still running at the deadline fails with Timeout."""
        release = threading.Event()
        self.addCleanup(release.set)
        self.senders[Channel.SMS] = FakeChannelSender(Channel.SMS, block=release)
        dispatcher = ChannelDispatcher(self.senders, timeout_seconds=0.2)

        start = time.perf_counter()
        attempt = dispatcher.dispatch("user-1", Topic.UPDATES)
        elapsed = time.perf_counter() - start

        self.assertLess(elapsed, 5.0)
        results = results_by_channel(attempt)
        self.assertEqual(results["sms"].status, "failed")
        self.assertEqual(results["sms"].failure_reason, "Timeout")
        self.assertEqual(results["email"].status, "sent")
        self.assertEqual(results["push"].status, "sent")
        self.assertEqual(attempt.overall_status, DispatchOutcome.PARTIAL_FAILURE)

    def test_senders_run_concurrently(self):
        """Test that channel sends overlap instead of running back to back."""
        senders = {
            channel: FakeChannelSender(channel, delay=0.3) for channel in Channel
        }

        start = time.perf_counter()
        attempt = ChannelDispatcher(senders, timeout_seconds=2.0).dispatch(
            "user-1", Topic.UPDATES
        )
        elapsed = time.perf_counter() - start

        self.assertEqual(attempt.overall_status, DispatchOutcome.ALL_SENT)
        self.assertLess(elapsed, 0.85)

    def test_missing_address_fails_without_calling_sender(self):
        """Test that a channel without an address fails immediately."""
        PreferenceRecord.objects.filter(user_id="user-1").update(phone_number=None)

        attempt = self.dispatcher.dispatch("user-1", Topic.UPDATES)

        results = results_by_channel(attempt)
        self.assertEqual(results["sms"].status, "failed")
        self.assertEqual(
            results["sms"].failure_reason, "No sms address on preference record"
        )
        self.assertEqual(self.senders[Channel.SMS].calls, [])

    def test_missing_sender_fails_channel(self):
        """Test that a channel with no configured sender fails."""
        del self.senders[Channel.PUSH]
        dispatcher = ChannelDispatcher(self.senders, timeout_seconds=2.0)

        attempt = dispatcher.dispatch("user-1", Topic.UPDATES)

        self.assertEqual(
            results_by_channel(attempt)["push"].failure_reason,
            "No sender configured for push",
        )

    def test_attempt_snapshots_timezone_and_metadata(self):
        """Test that the attempt carries the user's timezone and metadata."""
        attempt = self.dispatcher.dispatch(
            "user-1", Topic.UPDATES, metadata={"orderId": 7}
        )

        self.assertEqual(attempt.user_timezone, "Europe/Berlin")
        self.assertEqual(attempt.metadata, {"orderId": 7})
        self.assertEqual(attempt.user_id, "user-1")
        self.assertEqual(attempt.topic, "updates")

    def test_deleting_preferences_keeps_attempts(self):
        """Test that dispatch history survives preference deletion."""
        attempt = self.dispatcher.dispatch("user-1", Topic.UPDATES)

        PreferenceRecord.objects.filter(user_id="user-1").delete()

        stored = DispatchAttempt.objects.get(attempt_id=attempt.attempt_id)
        self.assertEqual(stored.overall_status, DispatchOutcome.ALL_SENT)
        self.assertEqual(ChannelResult.objects.filter(attempt=stored).count(), 3)

    @patch("core.services.channel_dispatcher.get_request_id")
    def test_workers_run_under_request_id(self, mock_get_request_id):
        """Test that sender threads see the caller's request ID."""
        from core.logging.context import get_request_id  # noqa: PLC0415

        seen = []

        class RecordingSender(FakeChannelSender):
            def send(self, address, topic, metadata):
                seen.append(get_request_id())
                return super().send(address, topic, metadata)

        mock_get_request_id.return_value = "req-123"
        dispatcher = ChannelDispatcher(
            {Channel.EMAIL: RecordingSender(Channel.EMAIL)}, timeout_seconds=2.0
        )

        dispatcher.dispatch("user-1", Topic.UPDATES, requested_channels=["email"])

        self.assertEqual(seen, ["req-123"])


class TestGetChannelDispatcher(TestCase):
    """Test cases for the default dispatcher factory."""

    def tearDown(self):
        """Clear the cached dispatcher."""
        get_channel_dispatcher.cache_clear()

    def test_builds_one_sender_per_channel(self):
        """Test that the default dispatcher is wired to the real senders."""
        get_channel_dispatcher.cache_clear()
        dispatcher = get_channel_dispatcher()

        self.assertIsInstance(dispatcher.senders[Channel.EMAIL], EmailChannelSender)
        self.assertIsInstance(dispatcher.senders[Channel.SMS], SmsChannelSender)
        self.assertIsInstance(dispatcher.senders[Channel.PUSH], PushChannelSender)
        self.assertEqual(dispatcher.timeout_seconds, 2.0)
        self.assertIs(get_channel_dispatcher(), dispatcher)
