"""API views for core application."""

from uuid import UUID

import structlog
from pydantic import ValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.enums.notification import DispatchOutcome
from core.pagination import DispatchAttemptPagination
from core.schemas.dispatch import DispatchAttemptResponse, NotificationSendRequest
from core.schemas.preference import PreferenceCreateRequest, PreferenceUpdateRequest
from core.services import health_service
from core.services.channel_dispatcher import get_channel_dispatcher
from core.services.dispatch_log import dispatch_log
from core.services.preference_service import preference_service

logger = structlog.get_logger(__name__)

OUTCOME_STATUS_CODES = {
    DispatchOutcome.ALL_SENT: status.HTTP_201_CREATED,
    DispatchOutcome.SUPPRESSED: status.HTTP_200_OK,
    DispatchOutcome.PARTIAL_FAILURE: status.HTTP_207_MULTI_STATUS,
    DispatchOutcome.ALL_FAILED: status.HTTP_502_BAD_GATEWAY,
}

# Send request fields whose validation failures get their own error code
SEND_FIELD_ERROR_CODES = {
    "topic": "invalid_topic",
    "channels": "invalid_channel",
}


def _validation_error_response(
    e: ValidationError, error: str = "bad_request"
) -> Response:
    """Build the 400 response for a pydantic validation failure."""
    return Response(
        {
            "error": error,
            "message": "Invalid request parameters",
            "errors": e.errors(include_url=False, include_context=False),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def _send_error_code(e: ValidationError) -> str:
    """Pick the error code for a rejected send request.

    A bad topic wins over bad channels, matching the order the dispatcher
    validates them in.
    """
    fields = {err["loc"][0] for err in e.errors() if err["loc"]}
    for field, code in SEND_FIELD_ERROR_CODES.items():
        if field in fields:
            return code
    return "bad_request"


class LivenessCheckView(APIView):
    """Liveness probe endpoint for Kubernetes.

    Returns 200 if the service is alive and running.
    This should not check external dependencies.
    """

    def get(self, _request):
        """Handle GET request for liveness check.

        Args:
            _request: HTTP request object (unused).

        Returns:
            Response object with status OK if service is alive.
        """
        liveness = health_service.get_liveness_status()
        return Response(liveness.to_response(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe endpoint for Kubernetes.

    Returns 200 if the service is ready to serve traffic.
    Returns degraded status (200 OK) when the database is unavailable.
    """

    def get(self, _request):
        """Handle GET request for readiness check.

        Args:
            _request: HTTP request object (unused).

        Returns:
            Response object with status OK if service is ready or degraded.
        """
        readiness = health_service.get_readiness_status()
        return Response(readiness.to_response(), status=status.HTTP_200_OK)


class PreferenceCreateView(APIView):
    """API endpoint for creating a user's preference record."""

    def post(self, request):
        """Create a preference record.

        Args:
            request: HTTP request containing userId, email and optional
                timezone, topics, frequency, channels, phoneNumber, pushToken

        Returns:
            201 Created with the stored preferences
            400 Bad Request if validation fails
            409 Conflict if the userId or email is already registered
        """
        try:
            create_request = PreferenceCreateRequest.model_validate(request.data)
        except ValidationError as e:
            logger.warning(
                "Invalid request body for preference creation",
                validation_errors=e.errors(include_url=False, include_context=False),
            )
            return _validation_error_response(e)

        preferences = preference_service.create_preferences(create_request)

        return Response(preferences.to_response(), status=status.HTTP_201_CREATED)


class PreferenceDetailView(APIView):
    """API endpoint for a single user's preference record.

    GET: Retrieve preferences
    PATCH: Partially update preferences
    DELETE: Delete preferences (idempotent)
    """

    def get(self, _request, user_id):
        """Retrieve preferences by user ID.

        Args:
            _request: HTTP request (unused)
            user_id: Opaque user identifier

        Returns:
            200 OK with the preferences, 404 if the user has no record
        """
        preferences = preference_service.get_preferences(user_id)
        return Response(preferences.to_response(), status=status.HTTP_200_OK)

    def patch(self, request, user_id):
        """Partially update preferences.

        Only the fields present in the body change; ``topics`` and
        ``channels`` merge key by key.

        Args:
            request: HTTP request containing the fields to change
            user_id: Opaque user identifier

        Returns:
            200 OK with the updated preferences
            400 Bad Request if validation fails or nothing would change
            404 Not Found if the user has no record
            409 Conflict if the new email is taken
        """
        try:
            update_request = PreferenceUpdateRequest.model_validate(request.data)
        except ValidationError as e:
            logger.warning(
                "Invalid request body for preference update",
                user_id=user_id,
                validation_errors=e.errors(include_url=False, include_context=False),
            )
            return _validation_error_response(e)

        preferences = preference_service.update_preferences(user_id, update_request)

        return Response(preferences.to_response(), status=status.HTTP_200_OK)

    def delete(self, _request, user_id):
        """Delete preferences; succeeds whether or not a record existed.

        Args:
            _request: HTTP request (unused)
            user_id: Opaque user identifier

        Returns:
            204 No Content
        """
        preference_service.delete_preferences(user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class NotificationSendView(APIView):
    """API endpoint for dispatching a notification to a user.

    The HTTP status reflects the aggregated outcome, but callers should read
    ``overallStatus`` and ``perChannelResults`` for the details.
    """

    def post(self, request):
        """Dispatch a notification across the user's eligible channels.

        Args:
            request: HTTP request containing userId, topic and optional
                channels and metadata

        Returns:
            201 Created when every channel sent
            200 OK when no channel was eligible
            207 Multi-Status when some channels failed
            502 Bad Gateway when every channel failed
            400 Bad Request for an invalid topic, channel or body
            404 Not Found if the user has no preference record
        """
        try:
            send_request = NotificationSendRequest.model_validate(request.data)
        except ValidationError as e:
            error = _send_error_code(e)
            logger.warning(
                "Invalid request body for notification send",
                error=error,
                validation_errors=e.errors(include_url=False, include_context=False),
            )
            return _validation_error_response(e, error=error)

        logger.info(
            "Notification send request received",
            user_id=send_request.user_id,
            topic=send_request.topic,
            channels=send_request.channels,
        )

        attempt = get_channel_dispatcher().dispatch(
            user_id=send_request.user_id,
            topic=send_request.topic,
            requested_channels=send_request.channels,
            metadata=send_request.metadata,
        )
        response_data = DispatchAttemptResponse.from_attempt(attempt)

        return Response(
            response_data.to_response(),
            status=OUTCOME_STATUS_CODES.get(
                DispatchOutcome(response_data.overall_status), status.HTTP_200_OK
            ),
        )


class DispatchAttemptDetailView(APIView):
    """API endpoint for retrieving a single dispatch attempt."""

    def get(self, _request, attempt_id):
        """Retrieve a dispatch attempt with its per-channel results.

        Args:
            _request: HTTP request (unused)
            attempt_id: UUID of the dispatch attempt

        Returns:
            200 OK with the attempt, 400 for a malformed ID, 404 if unknown
        """
        try:
            attempt_uuid = UUID(attempt_id)
        except ValueError:
            logger.warning("Invalid dispatch attempt ID format", attempt_id=attempt_id)
            return Response(
                {
                    "error": "bad_request",
                    "message": "Invalid dispatch attempt ID format",
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        attempt = dispatch_log.get_attempt(attempt_uuid)
        response_data = DispatchAttemptResponse.from_attempt(attempt)

        return Response(response_data.to_response(), status=status.HTTP_200_OK)


class UserDispatchAttemptListView(APIView):
    """API endpoint for a user's dispatch history, newest first.

    History is returned even after the user's preferences were deleted.
    """

    def get(self, request, user_id):
        """Retrieve paginated dispatch attempts for a user.

        Query parameters:
        - page: Page number (default: 1)
        - page_size: Items per page (default: 20, max: 100)

        Args:
            request: HTTP request
            user_id: Opaque user identifier

        Returns:
            Response with paginated dispatch attempt list
        """
        queryset = dispatch_log.list_attempts_for_user(user_id)

        paginator = DispatchAttemptPagination()
        page = paginator.paginate_queryset(queryset, request, view=self) or []

        attempts_data = [
            DispatchAttemptResponse.from_attempt(attempt).to_response()
            for attempt in page
        ]

        logger.info(
            "User dispatch history retrieved",
            user_id=user_id,
            count=len(attempts_data),
        )

        return paginator.get_paginated_response(attempts_data)
