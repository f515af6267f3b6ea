"""Service for managing per-user notification preference records."""

import structlog

from core.exceptions.service_exceptions import UserNotFoundError
from core.repositories import PreferenceRepository
from core.schemas.preference import (
    PreferenceCreateRequest,
    PreferenceResponse,
    PreferenceUpdateRequest,
)

logger = structlog.get_logger(__name__)


class PreferenceService:
    """Create, read, partially update and delete preference records."""

    def __init__(
        self, repository: type[PreferenceRepository] = PreferenceRepository
    ) -> None:
        """Initialize preference service.

        Args:
            repository: Persistence for preference records
        """
        self.repository = repository

    def create_preferences(self, request: PreferenceCreateRequest) -> PreferenceResponse:
        """Store a user's first preference submission.

        Args:
            request: Validated create request

        Returns:
            The stored record

        Raises:
            ConflictError: If the user ID or email already has a record
        """
        fields = request.model_dump(exclude={"user_id"})
        record = self.repository.create(request.user_id, **fields)

        logger.info(
            "preferences_created",
            user_id=record.user_id,
            frequency=record.frequency,
            timezone=record.timezone,
        )
        return PreferenceResponse.model_validate(record)

    def get_preferences(self, user_id: str) -> PreferenceResponse:
        """Fetch a user's preferences.

        Raises:
            UserNotFoundError: If the user has no record
        """
        record = self.repository.get(user_id)
        if record is None:
            raise UserNotFoundError(user_id)
        return PreferenceResponse.model_validate(record)

    def update_preferences(
        self, user_id: str, request: PreferenceUpdateRequest
    ) -> PreferenceResponse:
        """Apply a partial update.

        Fields absent from the request keep their stored values; ``topics``
        and ``channels`` merge key by key.

        Args:
            user_id: User whose record is updated
            request: Validated update request

        Returns:
            The record after the update

        Raises:
            UserNotFoundError: If the user has no record
            ConflictError: If the new email belongs to another user
        """
        changes = request.changes()
        record = self.repository.update(user_id, changes)
        if record is None:
            raise UserNotFoundError(user_id)

        logger.info(
            "preferences_updated",
            user_id=user_id,
            fields=sorted(changes),
        )
        return PreferenceResponse.model_validate(record)

    def delete_preferences(self, user_id: str) -> bool:
        """Delete a user's record; deleting an absent record is a no-op.

        Dispatch history for the user is kept.

        Returns:
            True if a record was removed
        """
        deleted = self.repository.delete(user_id)
        logger.info("preferences_deleted", user_id=user_id, existed=deleted)
        return deleted


# Global preference service instance
preference_service = PreferenceService()
