"""Data access for preference records."""

from core.repositories.preference_repository import PreferenceRepository

__all__ = ["PreferenceRepository"]
