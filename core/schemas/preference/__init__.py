"""Preference record schemas."""

from core.schemas.preference.channel_preferences import (
    ChannelPreferences,
    ChannelPreferencesUpdate,
)
from core.schemas.preference.preference_create_request import (
    PreferenceCreateRequest,
)
from core.schemas.preference.preference_response import PreferenceResponse
from core.schemas.preference.preference_update_request import (
    PreferenceUpdateRequest,
)
from core.schemas.preference.topic_preferences import (
    TopicPreferences,
    TopicPreferencesUpdate,
)

__all__ = [
    "ChannelPreferences",
    "ChannelPreferencesUpdate",
    "PreferenceCreateRequest",
    "PreferenceResponse",
    "PreferenceUpdateRequest",
    "TopicPreferences",
    "TopicPreferencesUpdate",
]
