"""Preference eligibility rules.

A notification on ``topic`` may go out on ``channel`` only when the user's
frequency is not NEVER, the topic is opted in and the channel is enabled.
These functions are pure and never touch the database.
"""

from collections.abc import Iterable
from typing import Protocol

from core.enums.notification import Channel, Frequency, Topic


class PreferenceLike(Protocol):
    """The parts of a preference record the rules read."""

    frequency: str
    topics: dict[str, bool]
    channels: dict[str, bool]


def is_eligible(record: PreferenceLike, topic: Topic | str, channel: Channel | str) -> bool:
    """Return whether ``record`` permits ``topic`` on ``channel``.

    Topics or channels absent from the record's documents count as opted
    out.
    """
    if Frequency(record.frequency) == Frequency.NEVER:
        return False
    if not (record.topics or {}).get(Topic(topic).value, False):
        return False
    return bool((record.channels or {}).get(Channel(channel).value, False))


def eligible_channels(
    record: PreferenceLike,
    topic: Topic | str,
    requested: Iterable[Channel] | None = None,
) -> list[Channel]:
    """Return the channels a notification should be attempted on.

    Args:
        record: The user's preferences.
        topic: Notification topic.
        requested: Channels the caller restricted delivery to, in order, or
            None for every channel.

    Returns:
        Eligible channels in requested order, or in Channel declaration
        order when nothing was requested. Never contains duplicates.
    """
    candidates = list(Channel) if requested is None else list(dict.fromkeys(requested))
    return [channel for channel in candidates if is_eligible(record, topic, channel)]
