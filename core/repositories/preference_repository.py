"""Repository for preference record persistence."""

from typing import Any

from django.db import IntegrityError, transaction

from core.exceptions.service_exceptions import ConflictError
from core.models import PreferenceRecord


class PreferenceRepository:
    """Single-document CRUD over PreferenceRecord.

    Each operation touches exactly one record; updates are read-modify-write
    under a row lock so concurrent partial updates do not lose fields.
    """

    @staticmethod
    def get(user_id: str) -> PreferenceRecord | None:
        """Return the record for a user, or None if absent."""
        return PreferenceRecord.objects.filter(user_id=user_id).first()

    @staticmethod
    def exists(user_id: str) -> bool:
        """Check whether a user has a preference record."""
        return PreferenceRecord.objects.filter(user_id=user_id).exists()

    @staticmethod
    def create(user_id: str, **fields: Any) -> PreferenceRecord:
        """Insert a new record.

        Raises:
            ConflictError: If the user ID or email is already taken.
        """
        if PreferenceRecord.objects.filter(user_id=user_id).exists():
            raise ConflictError(
                f"Preferences already exist for user {user_id}",
                detail="userId must be unique",
            )
        email = fields.get("email")
        if email and PreferenceRecord.objects.filter(email__iexact=email).exists():
            raise ConflictError(
                f"Email {email} is already registered",
                detail="email must be unique",
            )

        try:
            with transaction.atomic():
                return PreferenceRecord.objects.create(user_id=user_id, **fields)
        except IntegrityError as e:
            # Lost a race with a concurrent create
            raise ConflictError(
                f"Preferences already exist for user {user_id} or email {email}",
                detail="userId and email must be unique",
            ) from e

    @staticmethod
    def update(user_id: str, changes: dict[str, Any]) -> PreferenceRecord | None:
        """Apply a partial update atomically.

        ``topics`` and ``channels`` in ``changes`` are merged into the stored
        documents key by key; every other key replaces the stored value.

        Returns:
            The updated record, or None if the user has no record.

        Raises:
            ConflictError: If the new email belongs to another record.
        """
        with transaction.atomic():
            record = (
                PreferenceRecord.objects.select_for_update()
                .filter(user_id=user_id)
                .first()
            )
            if record is None:
                return None

            email = changes.get("email")
            if (
                email
                and PreferenceRecord.objects.filter(email__iexact=email)
                .exclude(user_id=user_id)
                .exists()
            ):
                raise ConflictError(
                    f"Email {email} is already registered",
                    detail="email must be unique",
                )

            update_fields = ["updated_at"]
            for field, value in changes.items():
                if field in ("topics", "channels"):
                    value = {**getattr(record, field), **value}
                setattr(record, field, value)
                update_fields.append(field)

            record.save(update_fields=update_fields)
            return record

    @staticmethod
    def delete(user_id: str) -> bool:
        """Delete a record if present.

        Returns:
            True if a record was deleted, False if none existed.
        """
        deleted, _ = PreferenceRecord.objects.filter(user_id=user_id).delete()
        return deleted > 0
