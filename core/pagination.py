"""Pagination classes for API endpoints."""

from rest_framework.pagination import PageNumberPagination


class DispatchAttemptPagination(PageNumberPagination):
    """Page-number pagination for a user's dispatch history.

    Clients pass ``page`` and optionally ``page_size`` (at most 100).
    """

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100
